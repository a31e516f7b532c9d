"""
Configuration Contracts
"""
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .data import MarketData


class SectorSpec(BaseModel):
    symbol: str
    name: str = ""


DEFAULT_SECTORS = [
    SectorSpec(symbol="XLK", name="Technology"),
    SectorSpec(symbol="XLF", name="Financials"),
    SectorSpec(symbol="XLE", name="Energy"),
    SectorSpec(symbol="XLV", name="Healthcare"),
    SectorSpec(symbol="XLI", name="Industrials"),
    SectorSpec(symbol="XLP", name="Consumer Staples"),
    SectorSpec(symbol="XLY", name="Consumer Discretionary"),
    SectorSpec(symbol="XLU", name="Utilities"),
    SectorSpec(symbol="XLRE", name="Real Estate"),
    SectorSpec(symbol="XLC", name="Communication Services"),
    SectorSpec(symbol="XLB", name="Materials"),
]


class AnalyticsConfig(BaseModel):
    """Rolling window sizes in trading days"""
    short_vol_window: int = Field(default=21, ge=2)
    long_vol_window: int = Field(default=63, ge=2)
    trading_days_per_year: int = Field(default=252, ge=1)

    @model_validator(mode='after')
    def long_after_short(self):
        if self.long_vol_window <= self.short_vol_window:
            raise ValueError('long_vol_window must be > short_vol_window')
        return self


class UniverseConfig(BaseModel):
    """Fixed sector order used for the feature columns"""
    sectors: List[SectorSpec] = Field(default_factory=lambda: list(DEFAULT_SECTORS))

    def order(self, data: MarketData) -> MarketData:
        """Configured sectors first, in configured order; unknown symbols keep their relative order after them."""
        rank = {s.symbol: i for i, s in enumerate(self.sectors)}
        ordered = sorted(
            enumerate(data.sectors),
            key=lambda item: (rank.get(item[1].symbol, len(rank)), item[0]),
        )
        return data.model_copy(update={"sectors": [s for _, s in ordered]})


class DatasetConfig(BaseModel):
    lookback: int = Field(default=60, ge=1)
    forward: int = Field(default=5, ge=1)
    max_sectors: int = Field(default=11, ge=1)


class ModelConfig(BaseModel):
    """Reference LSTM configuration"""
    input_size: int = Field(default=26, ge=1)
    hidden_size: int = Field(default=64, ge=1)
    num_layers: int = Field(default=1, ge=1)
    output_size: int = Field(default=1, ge=1)


class TrainingConfig(BaseModel):
    """Training configuration - YAML contract"""
    epochs: int = Field(default=1000, ge=1)
    batch_size: int = Field(default=32, ge=1)
    learning_rate: float = Field(default=1e-3, gt=0)
    train_fraction: float = Field(default=0.8, gt=0, lt=1)
    shuffle_seed: Optional[int] = 42
    device: str = "cpu"

    @field_validator('learning_rate')
    @classmethod
    def lr_reasonable(cls, v):
        if v > 0.1:
            raise ValueError('learning_rate too high, likely a mistake')
        return v


class FeatureFlags(BaseModel):
    """Feature groups fed to the model; disabled groups are zero-filled"""
    sector_volatility: bool = True
    sector_returns: bool = True
    cross_correlation: bool = True
    bond_curve: bool = True
    benchmark_volatility: bool = True


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None


class AppConfig(BaseModel):
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    universe: UniverseConfig = Field(default_factory=UniverseConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode='after')
    def model_matches_feature_width(self):
        # 2 groups of sector slots + correlation, spread, slope, benchmark
        width = 2 * self.dataset.max_sectors + 4
        if self.model.input_size != width:
            raise ValueError(
                f'model.input_size={self.model.input_size} does not match the feature width {width} '
                f'for dataset.max_sectors={self.dataset.max_sectors}'
            )
        return self


def load_config(path: Union[str, Path]) -> AppConfig:
    """Read a YAML file into a validated AppConfig. Missing sections use defaults."""
    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(**raw)
