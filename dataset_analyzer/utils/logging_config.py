# dataset_analyzer/utils/logging_config.py
import logging
import functools
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "dataset_analyzer"

def setup_logging(
    log_level: str = "INFO",
    log_dir: Union[str, Path] = "logs",
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging for the dataset analyzer

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory to store log files
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console
        log_format: Custom log format string

    Returns:
        Configured logger instance
    """

    # Default log format
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'

    formatter = logging.Formatter(log_format)
    level = getattr(logging, log_level.upper())

    # Get root logger
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    handlers = []
    file_path = None

    # File handler
    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        log_filename = f"analysis_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        file_path = log_path / log_filename

        file_handler = logging.FileHandler(file_path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Console handler
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    analyzer_logger = logging.getLogger(ROOT_LOGGER_NAME)
    analyzer_logger.info(f"Logging initialized. Level: {log_level}")

    if file_path is not None:
        analyzer_logger.info(f"Log file: {file_path}")

    return analyzer_logger

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name"""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

def log_async_execution_time(func):
    """Log start, duration and failure of an awaited analysis call"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        logger.info(f"Running {func.__qualname__}")

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed = time.perf_counter() - started
            logger.error(f"{func.__qualname__} raised after {elapsed:.2f}s: {e}")
            raise

        elapsed = time.perf_counter() - started
        logger.info(f"{func.__qualname__} finished in {elapsed:.2f}s")
        return result

    return wrapper

class PipelineLogger:
    """Context manager that brackets one analysis run in the log"""

    def __init__(self, run_name: str, logger: Optional[logging.Logger] = None):
        self.run_name = run_name
        self.logger = logger or get_logger("pipeline")
        self.started = None

    def __enter__(self):
        self.started = time.perf_counter()
        self.logger.info(f"=== {self.run_name}: started ===")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.started

        if exc_type is None:
            self.logger.info(f"=== {self.run_name}: done in {elapsed:.2f}s ===")
        else:
            self.logger.error(f"=== {self.run_name}: failed after {elapsed:.2f}s: {exc_val} ===")

    def log_metric(self, name: str, value: Union[int, float, str]):
        self.logger.info(f"[{self.run_name}] {name} = {value}")

def configure_third_party_logging(level: int = logging.WARNING):
    """Quiet the libraries the API and the graph runner pull in"""
    for name in ("httpx", "uvicorn.access", "langgraph", "asyncio"):
        logging.getLogger(name).setLevel(level)
