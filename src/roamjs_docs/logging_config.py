"""Loguru setup shared by the CLI and the MCP server."""

import sys

from loguru import logger

from roamjs_docs.config import log_level

DEFAULT_FORMAT = "{level.icon} {message}"
# Debug output names the emitting module so reference resolution can be followed.
VERBOSE_FORMAT = "{level.icon} {name}:{function} {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send logs to stderr, at DEBUG when verbose and otherwise at ``ROAMJS_LOG_LEVEL``.

    stdout is never used: the MCP server speaks its protocol over it.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level=log_level(), format=DEFAULT_FORMAT)
