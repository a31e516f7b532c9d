import json
import logging
import tempfile
import unittest
from pathlib import Path

from sectorvol.app import create_orchestrator
from sectorvol.training import TrainingOrchestrator
from sectorvol.utils.logger import JsonFormatter, setup_logger


class TestLogger(unittest.TestCase):

    def test_json_record(self):
        record = logging.LogRecord("sectorvol.test", logging.INFO, __file__, 10, "epoch %d", (3,), None)
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["message"], "epoch 3")
        self.assertEqual(payload["logger"], "sectorvol.test")

    def test_repeated_setup_does_not_stack_handlers(self):
        logger = setup_logger("sectorvol.test_setup", level="DEBUG")
        logger = setup_logger("sectorvol.test_setup", level="DEBUG")
        json_handlers = [h for h in logger.handlers if isinstance(h.formatter, JsonFormatter)]
        self.assertEqual(len(json_handlers), 1)

    def test_create_orchestrator_installs_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "sectorvol.log"
            config_path = Path(tmp) / "config.yaml"
            config_path.write_text(f"logging:\n  level: DEBUG\n  log_file: {log_path.as_posix()}\n")

            orch = create_orchestrator(config_path)
            logger = logging.getLogger("sectorvol")
            try:
                self.assertIsInstance(orch, TrainingOrchestrator)
                self.assertEqual(orch.config.logging.level, "DEBUG")
                self.assertEqual(logger.level, logging.DEBUG)
                json_handlers = [h for h in logger.handlers if isinstance(h.formatter, JsonFormatter)]
                self.assertEqual(len(json_handlers), 2)

                logging.getLogger("sectorvol.training").info("ready")
                for handler in json_handlers:
                    handler.flush()
                lines = log_path.read_text().splitlines()
                self.assertEqual(json.loads(lines[-1])["message"], "ready")
            finally:
                for handler in list(logger.handlers):
                    logger.removeHandler(handler)
                    handler.close()
                logger.setLevel(logging.NOTSET)


if __name__ == '__main__':
    unittest.main()
