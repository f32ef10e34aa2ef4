# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging


class ProteanError(ValueError):
    """Base class of all errors raised by protean."""
    pass


class ValidationError(ProteanError):
    """A (path, value) pair was rejected by the validator of a patch."""
    pass


class ConversionError(ProteanError):
    """A value could not be converted between its native form and the
    patch storage representation."""
    pass


class DecodeError(ConversionError):
    """A stored value could not be decoded into the expected type."""
    pass


class UnknownPathError(ProteanError):
    """A path segment does not resolve to a field, index or key."""
    pass


class PatchFormatError(ProteanError):
    """A serialized patch is not well formed."""
    pass


def init_logging(level=logging.INFO):
    """Sets up logging for protean entry points.

    Call this in all entry points (if __name__ == "__main__").
    Sets the log level for all protean loggers to `level`,
    unless `level` is given as `None`.
    """
    format = '[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s'
    logging.basicConfig(format=format, level=level)
    logging.captureWarnings(True)


def set_protean_log_level(level, set_main=True):
    """Set a log level for protean loggers"""
    logger.setLevel(level)
    if set_main:
        _baseLogger = logging.getLogger()
        _baseLogger.setLevel(level)


logger = logging.getLogger('protean')

debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception
critical = logger.critical
