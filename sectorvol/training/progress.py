"""
Training Progress
Progress state shared between the training worker (sole writer) and an
observer (reader).

Status, loss history and predictions are three cells, each behind its own
lock; no method holds more than one lock at a time. A reader polling the
cells may briefly see one updated before another. Observers that need a
consistent view drain `snapshots` instead: the worker pushes one immutable
ProgressSnapshot after each complete update. The channel is bounded; when
an observer falls behind, the oldest snapshots are dropped.
"""
import queue
import threading
from typing import List, Sequence, Tuple

from ..contracts.pipeline import Idle, ProgressSnapshot, TrainingStatus


class CancellationToken:
    """Cooperative stop flag, checked by the worker at epoch boundaries."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class TrainingProgress:

    def __init__(self, snapshot_capacity: int = 32):
        if snapshot_capacity < 1:
            raise ValueError("snapshot_capacity must be >= 1")
        self._status_lock = threading.Lock()
        self._status: TrainingStatus = Idle()

        self._losses_lock = threading.Lock()
        self._losses: List[float] = []

        self._predictions_lock = threading.Lock()
        self._predictions: List[Tuple[str, float]] = []

        self.snapshots: "queue.Queue[ProgressSnapshot]" = queue.Queue(maxsize=snapshot_capacity)

    @property
    def status(self) -> TrainingStatus:
        with self._status_lock:
            return self._status

    @property
    def losses(self) -> List[float]:
        with self._losses_lock:
            return list(self._losses)

    @property
    def predictions(self) -> List[Tuple[str, float]]:
        with self._predictions_lock:
            return list(self._predictions)

    def set_status(self, status: TrainingStatus):
        with self._status_lock:
            self._status = status

    def append_loss(self, loss: float):
        with self._losses_lock:
            self._losses.append(loss)

    def set_predictions(self, predictions: Sequence[Tuple[str, float]]):
        with self._predictions_lock:
            self._predictions = list(predictions)

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            status=self.status,
            losses=tuple(self.losses),
            predictions=tuple(self.predictions),
        )

    def publish(self) -> ProgressSnapshot:
        """Push the current state onto the snapshot channel, evicting the oldest when full."""
        snap = self.snapshot()
        while True:
            try:
                self.snapshots.put_nowait(snap)
                return snap
            except queue.Full:
                try:
                    self.snapshots.get_nowait()
                except queue.Empty:
                    pass  # drained by the observer meanwhile

    def drain(self) -> List[ProgressSnapshot]:
        """Retained snapshots published since the last drain, oldest first."""
        items = []
        while True:
            try:
                items.append(self.snapshots.get_nowait())
            except queue.Empty:
                return items

    def reset(self):
        self.set_status(Idle())
        with self._losses_lock:
            self._losses.clear()
        self.set_predictions([])
        self.publish()
