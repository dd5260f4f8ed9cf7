import logging
import sys

def get_logger(name: str, log_level: str = "INFO") -> logging.Logger:
    """
    Configures and returns a logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # get_logger runs once per module and again per app in create_app
    if logger.handlers:
        return logger

    # Create a handler to write logs to the console
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def set_log_level(log_level: str, prefix: str = "app"):
    """Applies `log_level` to every logger already created under `prefix`."""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(log_level)
