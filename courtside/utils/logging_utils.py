"""Logging setup for the Courtside entry points."""
import logging
import sys


def configure_logging(*, level: int = logging.INFO) -> None:
    """Configure a simple root logger that writes to stdout.

    Only installs a handler when the root logger has none, so embedding
    applications and test runners keep their own configuration.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stdout,
        )
    else:
        root.setLevel(level)
