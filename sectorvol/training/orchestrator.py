"""
Training Orchestrator
Runs dataset construction, the epoch loop and final inference on a
dedicated worker thread, reporting only through TrainingProgress.

State machine:
    Idle -> Training{epoch 0..E} -> Complete{best loss}
                                 -> Error{message}
Terminal states only leave through reset().
"""
import logging
import math
import threading
from typing import Callable, Optional

import torch

from ..contracts.config import AppConfig, FeatureFlags
from ..contracts.data import MarketData
from ..contracts.pipeline import Complete, Error, Training, is_terminal
from ..data.dataset import build_dataset
from ..features.schema import FeatureSchema
from ..models.vol_lstm import create_model
from ..validation.chronological import ChronologicalSplitter
from .progress import CancellationToken, TrainingProgress
from .trainer import evaluate, make_dataloader, predict_window, resolve_device, train_epoch

logger = logging.getLogger(__name__)


class TrainingFailure(Exception):
    """Ends a run with a human-readable Error status."""


class TrainingOrchestrator:
    """
    Out-of-band trainer for the volatility forecasting model.

    start() returns immediately; the caller polls `progress` (or drains its
    snapshot channel). One worker at a time: start() raises while a run is
    alive, so cancel() and join() it first, or use a separate orchestrator.
    Each start() hands out a fresh TrainingProgress.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 model_factory: Optional[Callable[[], torch.nn.Module]] = None):
        self.config = config or AppConfig()
        self.model_factory = model_factory or (lambda: create_model(self.config.model))
        self.schema = FeatureSchema(self.config.dataset.max_sectors)
        self.progress = TrainingProgress()
        self._thread: Optional[threading.Thread] = None
        self._token: Optional[CancellationToken] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, market_data: MarketData, flags: Optional[FeatureFlags] = None) -> TrainingProgress:
        """Spawn a worker for one run; flags are read once, at dataset build time."""
        if self.is_running:
            raise RuntimeError("A training run is already in progress")

        self.progress = TrainingProgress()
        self._token = CancellationToken()
        flags = flags or self.config.features

        self._thread = threading.Thread(
            target=self.run,
            args=(market_data, self.progress, flags, self._token),
            name="sectorvol-training",
            daemon=True,
        )
        self._thread.start()
        logger.info("Training worker started")
        return self.progress

    def cancel(self):
        """Request a stop at the next epoch boundary."""
        if self._token is not None:
            self._token.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker; True when it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def reset(self):
        """Return a finished run to Idle."""
        status = self.progress.status
        if not is_terminal(status):
            raise RuntimeError(f"Cannot reset while status is '{status.kind}'")
        self.progress.reset()

    def run(self, market_data: MarketData, progress: TrainingProgress,
            flags: Optional[FeatureFlags] = None,
            token: Optional[CancellationToken] = None):
        """Worker body. Safe to call synchronously; never raises."""
        total_epochs = self.config.training.epochs
        progress.set_status(Training(epoch=0, total_epochs=total_epochs, loss=math.nan))
        progress.publish()

        try:
            self._train(market_data, progress, flags or self.config.features,
                        token or CancellationToken())
        except TrainingFailure as e:
            logger.error(f"Training failed: {e}")
            progress.set_status(Error(message=str(e)))
            progress.publish()
        except Exception as e:
            logger.exception("Unexpected error during training")
            progress.set_status(Error(message=f"Training error: {e}"))
            progress.publish()

    def _train(self, market_data: MarketData, progress: TrainingProgress,
               flags: FeatureFlags, token: CancellationToken):
        cfg = self.config
        train_cfg = cfg.training

        market_data = cfg.universe.order(market_data)
        dataset = build_dataset(
            market_data,
            lookback=cfg.dataset.lookback,
            forward=cfg.dataset.forward,
            analytics=cfg.analytics,
            flags=flags,
            schema=self.schema,
        )
        if len(dataset) == 0:
            raise TrainingFailure("Not enough data to build training dataset. Load more market data.")
        try:
            self.schema.validate_matrix(dataset.samples[0].features, cfg.dataset.lookback)
        except ValueError as e:
            raise TrainingFailure(f"Invalid feature matrix: {e}") from e

        train_set, holdout_set = ChronologicalSplitter(train_cfg.train_fraction).split(dataset)
        if len(train_set) < train_cfg.batch_size or len(holdout_set) < 1:
            raise TrainingFailure(f"Dataset too small ({len(dataset)} samples). Need more data.")

        device = resolve_device(train_cfg.device)
        model = self.model_factory().to(device)
        model_width = getattr(model, "input_size", None)
        if model_width is not None and model_width != self.schema.width:
            raise TrainingFailure(
                f"Model expects feature width {model_width}, dataset provides {self.schema.width}")
        optimizer = torch.optim.Adam(model.parameters(), lr=train_cfg.learning_rate)

        train_loader = make_dataloader(train_set, train_cfg.batch_size,
                                       shuffle=True, seed=train_cfg.shuffle_seed)
        holdout_loader = make_dataloader(holdout_set, train_cfg.batch_size, shuffle=False)

        best_loss = math.inf
        for epoch in range(train_cfg.epochs):
            if token.cancelled:
                raise TrainingFailure("Training cancelled")

            avg_loss = train_epoch(model, train_loader, optimizer)
            holdout_loss = evaluate(model, holdout_loader)
            if avg_loss < best_loss:
                best_loss = avg_loss

            progress.append_loss(avg_loss)
            progress.set_status(Training(epoch=epoch + 1, total_epochs=train_cfg.epochs, loss=avg_loss))
            progress.publish()
            logger.info(f"Epoch {epoch + 1}/{train_cfg.epochs}, Loss: {avg_loss:.6f}, "
                        f"Hold-out: {holdout_loss:.6f}")

        # Single-output model: one forecast shared by every tracked sector
        predicted_vol = predict_window(model, dataset.last().features)
        progress.set_predictions([(symbol, predicted_vol) for symbol in dataset.symbols])
        progress.set_status(Complete(final_loss=best_loss))
        progress.publish()
        logger.info(f"Training complete. Best loss: {best_loss:.6f}, forecast: {predicted_vol:.6f}")
