import logging
import sys

_ROOT_NAME = "robopower"
_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Library default: silent until the host application configures logging
logging.getLogger(_ROOT_NAME).addHandler(logging.NullHandler())


def get_logger(name=None):
    """Return the package logger, or a child of it for a module name."""
    if not name or name == _ROOT_NAME:
        return logging.getLogger(_ROOT_NAME)
    if name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def configure_logging(level=logging.INFO, log_file=None):
    """
    Attach a console handler (and optionally a file handler) to the package logger.
    Calling it again replaces the handlers installed by a previous call.
    """
    logger = get_logger()
    logger.setLevel(level)
    formatter = logging.Formatter(_FORMAT, datefmt='%H:%M:%S')

    for handler in list(logger.handlers):
        if getattr(handler, "_robopower_handler", False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler._robopower_handler = True
    logger.addHandler(console_handler)

    if log_file:
        # The file gets everything for debugging
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler._robopower_handler = True
        logger.addHandler(file_handler)
        logger.setLevel(min(level, logging.DEBUG))

    return logger
