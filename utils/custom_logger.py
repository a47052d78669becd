import sys
from loguru import logger
from config.logging_config import LoggingConfig


def setup_logging(logging_config=None):
    """Install the loguru sinks for this process.

    Logs go to stderr so stdout carries nothing but the report. The optional file
    sink rotates and compresses. Until this runs, loguru's own stderr handler
    is in place.
    """
    if logging_config is None:
        logging_config = LoggingConfig()
    logger.remove()
    logger.add(sys.stderr, format=logging_config.log_format, level=logging_config.log_level, catch=True)
    if logging_config.log_file:
        logger.add(logging_config.log_file, format=logging_config.log_format, level=logging_config.log_file_level, rotation=logging_config.log_rotation, retention=logging_config.log_retention, compression=logging_config.log_compression, catch=True)


class Logger:
    def __init__(self, name):
        self.name = name

    def debug(self, msg, *args, **kwargs):
        logger.bind(name=self.name).opt(depth=1, exception=False).debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        logger.bind(name=self.name).opt(depth=1, exception=False).info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        logger.bind(name=self.name).opt(depth=1, exception=False).warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        logger.bind(name=self.name).opt(depth=1, exception=False).error(msg, *args, **kwargs)

    def critical(self, msg, *args, **kwargs):
        logger.bind(name=self.name).opt(depth=1, exception=False).critical(msg, *args, **kwargs)
