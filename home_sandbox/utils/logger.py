from loguru import logger
import os

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {module}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: str = "logs/app.log"):
    """Add the rotating file sink used by the application"""
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger.add(
        log_file,
        rotation="500 MB",
        level=level,
        format=LOG_FORMAT
    )
    logger.info(f"Logging to {log_file} at level {level}")


# Export logger instance
__all__ = ['logger', 'configure_logging']
