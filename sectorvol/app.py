"""
Application entry point.

Hosts call create_orchestrator() once at startup: it loads the YAML
config, installs the JSON log handlers on the package logger and returns
a TrainingOrchestrator ready for start().

    orch = create_orchestrator("config/config.yaml")
    progress = orch.start(market_data)
"""
from pathlib import Path
from typing import Optional, Union

from .contracts.config import AppConfig, load_config
from .training.orchestrator import TrainingOrchestrator
from .utils.logger import setup_logger


def create_orchestrator(config_path: Optional[Union[str, Path]] = None,
                        config: Optional[AppConfig] = None) -> TrainingOrchestrator:
    if config is None:
        config = load_config(config_path) if config_path else AppConfig()

    logger = setup_logger("sectorvol", level=config.logging.level, log_file=config.logging.log_file)
    logger.info("Configuration loaded.")
    return TrainingOrchestrator(config)
