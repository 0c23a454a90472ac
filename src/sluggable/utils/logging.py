"""Process-level logging setup for the CLI"""

import logging


def configure_logging(level: int = logging.WARNING) -> None:
    """Install a stream handler on the root logger unless the runtime already did."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.addHandler(handler)
