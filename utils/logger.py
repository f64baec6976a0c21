import logging
from pathlib import Path
from datetime import datetime
from config import Config

class CustomLogger:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._setup()
        return cls._instance

    def _setup(self):
        log_dir = Path(Config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger("scramble_game")
        self.logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))

        # Module reloads must not stack handlers
        if self.logger.handlers:
            return

        # File handler
        fh = logging.FileHandler(
            log_dir / f"game_{datetime.now().strftime('%Y%m%d')}.log",
            encoding="utf-8"
        )
        fh.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        # Console handler
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter('%(levelname)-8s | %(message)s'))

        self.logger.addHandler(fh)
        self.logger.addHandler(ch)

    def get_logger(self, name: str = "scramble_game"):
        return self.logger.getChild(name)

# Singleton instance
logger = CustomLogger().get_logger("engine")
