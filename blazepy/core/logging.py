"""Logging utilities for blazepy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a propagating blazepy logger.
    
    While the root logger has no handlers the logger is pinned at WARNING,
    so importing blazepy stays quiet. A later basicConfig() does not lower
    that level; call blazepy.setup_logging() to change every blazepy
    logger at once (the CLI does this for --verbose).
    
    Args:
        name: Logger name (typically 'blazepy.<area>')
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    if not logging.getLogger().handlers and logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)
    
    return logger
