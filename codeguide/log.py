"""Logging setup for the codeguide CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, so embedding hosts and tests stay silent
unless they opt in.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from codeguide.config import APP_NAME


def configure_logging(*, verbose: bool = False) -> None:
    """Route ``codeguide`` log records to stderr through Rich.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    app_logger = logging.getLogger(APP_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    app_logger.propagate = False

    # httpx logs full request URLs at INFO, which would include the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
