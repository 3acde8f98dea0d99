import contextlib
import logging

LOG_FMT = "%(asctime)s - %(levelname)-8s - %(name)s - %(funcName)s:%(lineno)d - %(message)s"
DEBUG_HANDLER_NAME = "agentloop-debug"


def basic_log_config(level=logging.WARNING, **kwargs) -> None:
    """Configure logging defaults for all loggers."""
    logging.basicConfig(level=level, format=LOG_FMT, **kwargs)


def enable_debug_logging(handler: logging.Handler | None = None) -> logging.Logger:
    """Send agentloop debug records (rounds, options, dispatches) to ``handler``.

    Defaults to a StreamHandler using LOG_FMT, added once however often this is
    called. Returns the package logger.
    """
    logger = logging.getLogger("agentloop")
    if handler is not None:
        logger.addHandler(handler)
    elif not any(h.name == DEBUG_HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(DEBUG_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FMT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger


@contextlib.contextmanager
def suppress_logs(logger: logging.Logger):
    """Context manager to temporarily disable logs."""
    try:
        logger.disabled = True
        yield
    finally:
        logger.disabled = False
