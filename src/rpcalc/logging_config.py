'''
Logger set-up for the rpcalc namespace.
'''

import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.WARNING,
                  log_file: Optional[str] = None) -> None:
    '''
    Configure the 'rpcalc' logger.

    Logs go to stderr, so they never interleave with calculator output on
    stdout.

    :param level: Logging level, e.g. logging.DEBUG.
    :param log_file: Optional path to also write logs to.
    '''
    logger = logging.getLogger('rpcalc')
    logger.setLevel(level)

    # Re-running set-up must not duplicate output.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w',
                                           encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug('Logging initialized.')
