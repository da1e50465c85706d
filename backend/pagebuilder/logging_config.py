import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app):
    """
    Attach one stream handler to the ``pagebuilder`` logger tree and set
    its level from ``LOG_LEVEL``. Safe to call once per app instance.
    """
    level = app.config.get("LOG_LEVEL", "INFO")
    logger = logging.getLogger("pagebuilder")
    logger.setLevel(level)

    if not any(getattr(h, "_pagebuilder", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pagebuilder = True
        logger.addHandler(handler)

    app.logger.setLevel(level)
    return logger
