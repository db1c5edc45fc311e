import logging
import os

logger = logging.getLogger("orrery")

log_level_env: str | None = os.environ.get("LOG_LEVEL", None)
if log_level_env:
    levels_by_name = logging.getLevelNamesMapping()
    level = levels_by_name[log_level_env.upper()]

    logger.setLevel(level)
    logger.propagate = False
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
else:
    logger.setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for module ``name``."""
    return logger.getChild(name.rsplit(".", 1)[-1])
