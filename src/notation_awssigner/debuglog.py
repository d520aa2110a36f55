"""
Debug log file

When debugging is enabled the plugin appends DEBUG records for the whole
``notation_awssigner`` logger tree, and botocore's request and response
logging of the AWS Signer calls, to ``plugin.log`` under the user's
configuration directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click

from notation_awssigner.version import get_version

DEBUG_ENV_VAR = "AWS_SIGNER_NOTATION_PLUGIN_DEBUG"
APP_DIR_NAME = "notation-aws-signer"
LOG_FILE_NAME = "plugin.log"

DEBUG_LOGGERS = ("notation_awssigner", "botocore")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def debug_enabled(environ: Optional[dict[str, str]] = None) -> bool:
    """True if the debug environment variable is set to ``true``."""
    environ = os.environ if environ is None else environ
    return environ.get(DEBUG_ENV_VAR) == "true"


def default_log_path() -> Path:
    return Path(click.get_app_dir(APP_DIR_NAME)) / LOG_FILE_NAME


def configure_debug_logging(path: Optional[Path] = None) -> logging.FileHandler:
    """Attach a DEBUG file handler to the package and botocore loggers.

    The log directory is created with mode 0700 and the file with 0600.

    Returns:
        The installed handler; close it with :func:`close_debug_logging`.
    """
    path = path or default_log_path()
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    if not path.exists():
        path.touch(mode=0o600)

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    for name in DEBUG_LOGGERS:
        target = logging.getLogger(name)
        target.setLevel(logging.DEBUG)
        target.addHandler(handler)

    package_logger = logging.getLogger("notation_awssigner")
    package_logger.debug("-" * 89)
    package_logger.debug("Logs from execution of AWS signer plugin version: %s", get_version())
    return handler


def close_debug_logging(handler: logging.Handler) -> None:
    for name in DEBUG_LOGGERS:
        target = logging.getLogger(name)
        target.removeHandler(handler)
        target.setLevel(logging.NOTSET)
    handler.close()
