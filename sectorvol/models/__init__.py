from .vol_lstm import VolatilityLSTM, create_model
