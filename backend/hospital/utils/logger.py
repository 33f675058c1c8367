"""
System logging configuration.
"""
import logging
from typing import Optional

from hospital.config import settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configures and returns the main system logger.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    
    Returns:
        Configured logger
    """
    if level is None:
        level = settings.LOG_LEVEL
    
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    formatter = logging.Formatter(
        settings.LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    
    logger = logging.getLogger('hms')
    logger.setLevel(numeric_level)
    
    # Avoid duplicated handlers on reconfiguration
    if not logger.handlers:
        logger.addHandler(console_handler)
    
    return logger


# Global logger
logger = configure_logging()


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger for a specific module.
    
    Args:
        name: Module name
    
    Returns:
        Child logger of the main system logger
    """
    return logging.getLogger(f'hms.{name}')
