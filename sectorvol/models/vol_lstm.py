import torch
import torch.nn as nn

from ..contracts.config import ModelConfig


class VolatilityLSTM(nn.Module):
    """LSTM -> Linear regressor: [batch, lookback, features] -> [batch, output_size]."""

    def __init__(self, input_size: int = 26, hidden_size: int = 64,
                 num_layers: int = 1, output_size: int = 1):
        super(VolatilityLSTM, self).__init__()
        self.input_size = input_size
        self.hidden_size = hidden_size
        self.num_layers = num_layers

        self.lstm = nn.LSTM(input_size, hidden_size, num_layers, batch_first=True)
        self.fc = nn.Linear(hidden_size, output_size)

    def forward(self, x):
        h0 = torch.zeros(self.num_layers, x.size(0), self.hidden_size, device=x.device)
        c0 = torch.zeros(self.num_layers, x.size(0), self.hidden_size, device=x.device)

        out, _ = self.lstm(x, (h0, c0))
        return self.fc(out[:, -1, :])  # Last time step


def create_model(config: ModelConfig = None) -> VolatilityLSTM:
    config = config or ModelConfig()
    return VolatilityLSTM(
        input_size=config.input_size,
        hidden_size=config.hidden_size,
        num_layers=config.num_layers,
        output_size=config.output_size,
    )
