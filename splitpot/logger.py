"""
Logging setup for applications embedding the engine.

Library modules only create module-level loggers; hosts call
``init_logger`` once at startup.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def init_logger(dev_mode: bool = False) -> None:
    """Configure root logging: DEBUG in dev mode, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if dev_mode else logging.INFO,
        format=LOG_FORMAT,
    )
