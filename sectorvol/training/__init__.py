from .progress import TrainingProgress, CancellationToken
from .orchestrator import TrainingOrchestrator, TrainingFailure
from .trainer import train_epoch, evaluate, predict_window, compute_loss
