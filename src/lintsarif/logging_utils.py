from __future__ import annotations

import logging
import sys


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    """
    Configure process-wide logging defaults for CLI/CI usage.

    - Default: INFO
    - --verbose: DEBUG
    - --quiet: WARNING

    Logging goes to stderr so SARIF written to stdout stays machine-readable.
    """

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    fmt = "lintsarif: %(message)s"
    if verbose:
        fmt = "lintsarif [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
