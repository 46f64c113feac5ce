import logging

LOGGER_NAME = "linknest"

formatter = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S"
)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid adding handlers twice (e.g. during autoreload or repeated lifespans)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
