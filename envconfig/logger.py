"""Logger helpers. The library never installs handlers; the application does."""

import logging
import os
from typing import Mapping

ROOT_LOGGER_NAME = "envconfig"


def configure_from_env(environ: Mapping[str, str] | None = None) -> logging.Logger:
    """Set DEBUG on the envconfig parent logger when ENVCONFIG_DEBUG=1."""
    if environ is None:
        environ = os.environ
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if environ.get("ENVCONFIG_DEBUG", "0") == "1":
        root_logger.setLevel(logging.DEBUG)
    return root_logger


def get_logger(name):
    """Get a logger under the envconfig namespace. Its level is left to the parent."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_resolver_logger():
    return get_logger("resolver")


def get_coerce_logger():
    return get_logger("coerce")


def get_loader_logger():
    return get_logger("loader")


configure_from_env()
