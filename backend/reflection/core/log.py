import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the `reflection` logger tree.

    Safe to call more than once (tests build many apps).
    """
    logger = logging.getLogger("reflection")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_reflection", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._reflection = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
