from .dataset import VolDataset, build_dataset
