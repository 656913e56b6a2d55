"""Logging setup for the duck command line."""

import logging

from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    root.setLevel(level)

    # Calling twice (e.g. repeated CLI invocations in one process) must not
    # duplicate output
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.addHandler(
        RichHandler(level=level, show_time=verbose, show_path=verbose, rich_tracebacks=True)
    )
