import logging
import logging.handlers
'''
Example for usage of logger.*
from meshgrad.logging_config import setup_logging

logger = setup_logging()
logger.info('Building gradient operator.')
logger.debug('Assembled triplets successfully.')
logger.warning('Potential issue detected: zero-area faces.')
'''

LOGGER_NAME = 'meshgrad'


def setup_logging(log_file=None, quiet: bool = False):
    logger = logging.getLogger(LOGGER_NAME)

    if logger.handlers:
        if quiet:
            logger.handlers = [h for h in logger.handlers
                               if type(h) is not logging.StreamHandler]
        return logger

    logger.setLevel(logging.DEBUG)

    # Log format
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(log_file,
                                                            maxBytes=5_000_000,
                                                            backupCount=0)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
