"""
Sectorvol Data Contracts
Pydantic models for system boundaries.
"""
from .config import (
    AppConfig, AnalyticsConfig, DatasetConfig, FeatureFlags, ModelConfig,
    LoggingConfig, SectorSpec, TrainingConfig, UniverseConfig, load_config,
)
from .data import Bar, InstrumentSeries, YieldCurvePoint, MarketData, TENORS
from .analytics import VolatilityMetrics, CorrelationMatrix, BondSpread
from .pipeline import (
    Sample, TrainingStatus, Idle, Training, Complete, Error, ProgressSnapshot,
    is_terminal,
)
