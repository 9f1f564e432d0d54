import logging
import sys


# Third-party loggers that are too chatty at INFO
LIBRARY_LOG_LEVELS = {
    "asyncio": "WARNING",
}


class LoggingManager:
    """Manager for logging setup and logger retrieval."""

    @classmethod
    def setup_logging(cls, level: str = "WARNING") -> None:
        """Setup logging for the command-line tool.

        Logs go to stderr so they never mix with table or JSON output.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = getattr(logging, level.upper(), logging.WARNING)

        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(numeric_level)

        root_logger = logging.getLogger()
        root_logger.setLevel(numeric_level)
        root_logger.addHandler(console_handler)

        for logger_name, library_level in LIBRARY_LOG_LEVELS.items():
            logging.getLogger(logger_name).setLevel(getattr(logging, library_level))

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name, typically __name__
        """
        return logging.getLogger(name)
