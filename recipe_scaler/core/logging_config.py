"""
Centralized logging configuration for the recipe scaler.
"""
import logging
import sys

# Create a formatter with a consistent format
FORMATTER = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.
    
    Args:
        name: The name of the logger (typically __name__)
        
    Returns:
        A configured Logger instance
    """
    logger = logging.getLogger(name)
    
    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(FORMATTER)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    
    return logger


def setup_logging(level: int = logging.INFO) -> None:
    """
    Apply a logging level to every recipe_scaler logger created so far.

    Args:
        level: The logging level (default: INFO)
    """
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("recipe_scaler") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as "debug" to its logging constant."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default
