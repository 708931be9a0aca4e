"""
Centralized logging configuration for Co-Drawing
"""
import logging
import sys
from pathlib import Path


class LoggingConfig:
    """Central logging configuration"""

    LOG_FILE_NAME = "co_drawing.log"

    _initialized = False

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: int = logging.INFO):
        """
        Setup logging system: DEBUG to file, console_level to stdout

        Args:
            log_dir: Folder for the log file (created if missing)
            console_level: Minimum level printed to the terminal
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / cls.LOG_FILE_NAME

        # Root logger
        logger = logging.getLogger()
        logger.setLevel(logging.DEBUG)

        # File handler
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

        # Console handler (for terminal output)
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_formatter = logging.Formatter('[%(levelname)s] %(message)s')
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        # google-genai / httpx are chatty at DEBUG
        for noisy in ('httpx', 'httpcore', 'google_genai'):
            logging.getLogger(noisy).setLevel(logging.WARNING)

        cls._initialized = True
        logger.info("Logging system initialized")

    @classmethod
    def get_logger(cls, name: str):
        """Get a logger instance"""
        return logging.getLogger(name)


__all__ = ['LoggingConfig']
