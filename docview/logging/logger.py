import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("docview")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    @contextmanager
    def timed(cls, label: str) -> Iterator[None]:
        """Log `label`, run the block, then log the elapsed wall time.

        Nothing is logged on completion if the block raises.
        """
        cls._logger.info(label)
        started = time.perf_counter()
        yield
        elapsed = time.perf_counter() - started
        cls._logger.info(f"Completed in {elapsed:.3g}s")
