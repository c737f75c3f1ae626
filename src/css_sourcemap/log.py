"""Logging helper module."""

from logging import DEBUG, INFO, Formatter, Logger, StreamHandler, getLogger

_PACKAGE_LOGGER = "css_sourcemap"


def init_logging(*, verbose: bool = False) -> None:
    """Attach a console handler to the package logger.

    Should be called once by the embedding build tool. Libraries that
    configure logging themselves do not need it.
    """
    logger = getLogger(_PACKAGE_LOGGER)
    if any(isinstance(h, StreamHandler) for h in logger.handlers):
        return

    console_handler = StreamHandler()
    console_handler.setFormatter(Formatter("%(levelname)s: [%(name)s] %(message)s"))
    logger.addHandler(console_handler)
    logger.setLevel(DEBUG if verbose else INFO)
    if verbose:
        logger.debug("Debug logging enabled.")


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)
