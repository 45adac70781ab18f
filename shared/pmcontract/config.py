"""
pmcontract Configuration

Settings come from the environment and are read at call time, so tests
and embedding applications can flip them without re-importing.
"""
import logging
import os

STRICT_ENV_VAR = "PMCONTRACT_STRICT"
LOG_LEVEL_ENV_VAR = "PMCONTRACT_LOG_LEVEL"


def strict_mode_enabled() -> bool:
    """Report undeclared fields when a schema forbids them (default: off)"""
    return os.environ.get(STRICT_ENV_VAR, "false").lower() == "true"


def get_log_level() -> int:
    """Log level for the pmcontract logger; WARNING unless overridden"""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging() -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    Library code never calls this; command-line tools do.
    """
    logger = logging.getLogger("pmcontract")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(get_log_level())
    return logger
