"""
Module which contains all functions related to logging.
"""


import logging
import logging.handlers
import os
import queue
from dataclasses import field
from marshmallow import validate
from marshmallow_dataclass import dataclass, Optional


formatter = logging.Formatter(
        "{asctime} - {name} - {filename}:{lineno} - {levelname} - {funcName} \
- {threadName} - {message}",
        style="{"
        )


null_logger = logging.getLogger("null")
null_handler = logging.NullHandler()
null_handler.setFormatter(formatter)
null_logger.setLevel(logging.CRITICAL)
null_logger.addHandler(null_handler)


@dataclass
class LoggingConfiguration:
    log: Optional[str] = field(default=None, metadata={
        "metadata": {"description": "Log file. If unset, messages are written to the standard error."}
    })
    log_level: str = field(default="INFO", metadata={
        "metadata": {"description": "Verbosity of the logs"},
        "validate": validate.OneOf(["DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"])
    })


def create_null_logger(*args, **kwargs):
    """Function to create a default logging instance.
    The default is a null handler (no log).

    :param args: optionally, the name of the logger to create."""

    if len(args) > 0:
        null_special_logger = logging.getLogger(args[0])
        null_special_handler = logging.NullHandler()
        null_special_handler.setFormatter(formatter)
        null_special_logger.handlers = [null_special_handler]
        if "level" in kwargs:
            null_special_logger.setLevel(kwargs["level"])
        else:
            null_special_logger.setLevel(logging.CRITICAL)
        return null_special_logger

    return null_logger


def check_logger(logger):
    """Quick function to verify that a logger is really a logger,
    otherwise it raises a ValueError.

    :param logger: the logger instance
    :type logger: logging.Logger
    """

    if isinstance(logger, logging.Logger):
        return logger
    else:
        raise ValueError("{0} is not a logger but rather {1}".format(
            logger, type(logger)
        ))


def create_default_logger(name, level="WARN"):
    """Default logger
    :param name: string used to give a name to the logger.
    :type name: str

    :param level: level of the logger. Default: WARN
    """

    logger = logging.getLogger(name)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def create_logger_from_conf(conf, name="locompare", mode="a"):
    """
    Create a logger following the log settings of a configuration object.
    :param conf: the configuration
    :type conf: Locompare.configuration.configuration.LocompareConfiguration
    """

    logger = logging.getLogger(name)
    if conf.log_settings.log is None:
        handler = logging.StreamHandler()
    else:
        _log_folder = os.path.dirname(conf.log_settings.log)
        if _log_folder and not os.path.exists(_log_folder):
            os.makedirs(_log_folder)
        handler = logging.FileHandler(conf.log_settings.log, mode=mode)

    handler.setFormatter(formatter)
    logger.setLevel(conf.log_settings.log_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def create_queue_logger(logger, name="locompare_queue"):
    """
    Create a logger which forwards its records through a queue to the handlers of
    an existing logger. This allows worker threads to log without contending for
    the final handlers (e.g. a file).

    :param logger: the logger whose handlers will receive the records.
    :type logger: logging.Logger

    :param name: name of the queue logger.

    :returns: the queue logger and the (started) listener. The caller must stop the listener.
    :rtype: (logging.Logger, logging.handlers.QueueListener)
    """

    check_logger(logger)
    log_queue = queue.Queue(-1)
    listener = logging.handlers.QueueListener(log_queue, *logger.handlers, respect_handler_level=True)
    queue_logger = logging.getLogger(name)
    queue_logger.handlers = [logging.handlers.QueueHandler(log_queue)]
    queue_logger.setLevel(logger.level)
    queue_logger.propagate = False
    listener.start()
    return queue_logger, listener
