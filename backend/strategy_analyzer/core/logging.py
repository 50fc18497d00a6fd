import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "strategy_analyzer"

def configure_logging(level: str = "INFO", propagate: bool = False) -> logging.Logger:
    """
    Attach a single named stream handler to the package logger; safe to call
    repeatedly. The logger does not propagate by default, so a configured
    root handler (e.g. uvicorn's) does not print each record twice.
    """
    logger = logging.getLogger("strategy_analyzer")
    logger.setLevel(level.upper())
    logger.propagate = propagate
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
