"""
Shared Training Logic
MSE regression loop, hold-out evaluation and single-window inference.
"""
import logging
import math
from typing import Optional

import numpy as np
import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)


def resolve_device(name: str = "cpu") -> torch.device:
    """'auto' picks CUDA when available."""
    if name == "auto":
        return torch.device('cuda' if torch.cuda.is_available() else 'cpu')
    return torch.device(name)


def make_dataloader(dataset, batch_size: int, shuffle: bool = True,
                    seed: Optional[int] = None) -> torch.utils.data.DataLoader:
    generator = None
    if shuffle and seed is not None:
        generator = torch.Generator()
        generator.manual_seed(seed)
    return torch.utils.data.DataLoader(
        dataset,
        batch_size=batch_size,
        shuffle=shuffle,
        generator=generator,
        num_workers=0,
    )


def compute_loss(outputs: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
    """Mean squared error between [B, 1] predictions and [B, 1] targets."""
    return F.mse_loss(outputs, targets)


def train_epoch(model, dataloader, optimizer) -> float:
    """
    One pass over the dataloader with one optimizer step per batch.

    Returns the average batch loss, or NaN when the loader is empty.
    """
    model.train()
    device = next(model.parameters()).device
    total_loss = 0.0
    num_batches = 0

    for X, y in dataloader:
        X = X.to(device)
        y = y.to(device)

        optimizer.zero_grad()
        outputs = model(X)
        loss = compute_loss(outputs, y)
        loss.backward()
        optimizer.step()

        total_loss += loss.item()
        num_batches += 1

    return total_loss / num_batches if num_batches else math.nan


def evaluate(model, dataloader) -> float:
    """Average MSE without gradient updates."""
    model.eval()
    device = next(model.parameters()).device
    total_loss = 0.0
    num_batches = 0

    with torch.no_grad():
        for X, y in dataloader:
            outputs = model(X.to(device))
            total_loss += compute_loss(outputs, y.to(device)).item()
            num_batches += 1

    return total_loss / num_batches if num_batches else math.nan


def predict_window(model, features: np.ndarray) -> float:
    """Forward one [lookback, width] window as a batch of 1 in inference mode."""
    model.eval()
    device = next(model.parameters()).device
    X = torch.as_tensor(np.asarray(features, dtype=np.float32), device=device).unsqueeze(0)

    with torch.no_grad():
        output = model(X)

    return float(output.reshape(-1)[0].item())
