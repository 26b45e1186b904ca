"""Root logger setup shared by the API process and the operator scripts."""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls are no-ops."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
