"""
Chronological Split
Leading fraction for training, trailing remainder held out. No shuffling.
"""
import logging
from typing import Tuple

from ..data.dataset import VolDataset

logger = logging.getLogger(__name__)


class ChronologicalSplitter:
    """
    Structure:
    |--------Train (80%)--------|--Hold-out (20%)--|
    """
    def __init__(self, train_fraction: float = 0.8):
        if not 0 < train_fraction < 1:
            raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
        self.train_fraction = train_fraction

    def train_size(self, n_samples: int) -> int:
        return int(n_samples * self.train_fraction)

    def split(self, dataset: VolDataset) -> Tuple[VolDataset, VolDataset]:
        cut = self.train_size(len(dataset))
        logger.info(f"Chronological split: {cut} train / {len(dataset) - cut} hold-out samples")
        return dataset.subset(0, cut), dataset.subset(cut, len(dataset))
