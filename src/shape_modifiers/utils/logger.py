"""Logging setup for entry points"""
import sys
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(verbose: bool = False, stream=None):
    """Configure root logging for command-line use

    Args:
        verbose: DEBUG when True, otherwise only warnings and errors
        stream: Output stream (default: stdout)
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )
