import logging
import sys

_PACKAGE_LOGGER = "club_eligibility"


def configure_logging(*, verbose: bool = False) -> None:
    """Log to stderr: this package at INFO (DEBUG when verbose), libraries at WARNING."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
    root.addHandler(handler)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
