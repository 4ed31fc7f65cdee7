"""Logging setup for the ``cipherly`` command.

Records go to stderr: stdout carries the ciphertext or plaintext and must
stay byte-exact when piped.
"""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.WARNING) -> None:
    # Only the first call configures the root logger.
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
