"""
Pipeline Contracts
Training samples, the training state machine and observer snapshots.
"""
import math
from typing import Literal, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator


class Sample(BaseModel):
    """One sliding window: [lookback, F] features and a scalar target"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    features: np.ndarray
    target: float

    @field_validator('features', mode='before')
    @classmethod
    def two_dimensional(cls, v):
        v = np.array(v, dtype=float)
        if v.ndim != 2:
            raise ValueError(f'features must be [lookback, width], got shape {v.shape}')
        v.setflags(write=False)
        return v

    @property
    def lookback(self) -> int:
        return self.features.shape[0]

    @property
    def width(self) -> int:
        return self.features.shape[1]


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal['idle'] = 'idle'


class Training(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal['training'] = 'training'
    epoch: int
    total_epochs: int
    loss: float = math.nan

    @property
    def fraction(self) -> float:
        return self.epoch / self.total_epochs if self.total_epochs else 0.0


class Complete(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal['complete'] = 'complete'
    final_loss: float


class Error(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal['error'] = 'error'
    message: str


TrainingStatus = Union[Idle, Training, Complete, Error]


def is_terminal(status: TrainingStatus) -> bool:
    return isinstance(status, (Complete, Error))


class ProgressSnapshot(BaseModel):
    """Immutable view of all progress cells at one publication"""
    model_config = ConfigDict(frozen=True)

    status: TrainingStatus
    losses: Tuple[float, ...] = ()
    predictions: Tuple[Tuple[str, float], ...] = ()
