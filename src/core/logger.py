import logging

# Parser traces go to a file so they never interleave with game output.
# The file is only created once the first record is written.

DEFAULT_LOG_FILE = "parser_trace.log"


def setup_parser_logger(name="lantern.parser", log_file=DEFAULT_LOG_FILE, level=logging.INFO):
    """
    Sets up a logger that writes only to a file.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Check if handler already exists to avoid duplicate logs
    if not logger.handlers:
        file_handler = logging.FileHandler(log_file, delay=True)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(message)s')
        file_handler.setFormatter(formatter)

        logger.addHandler(file_handler)

        # Prevent propagation to the root logger to avoid printing to stdout
        logger.propagate = False

    return logger


def reconfigure_parser_logger(log_file=None, level=None, name="lantern.parser"):
    """Point the parser logger at a new file and/or level (used by settings)."""
    logger = logging.getLogger(name)
    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        if isinstance(level, int):
            logger.setLevel(level)
    if log_file:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        file_handler = logging.FileHandler(log_file, delay=True)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(message)s'))
        logger.addHandler(file_handler)
        logger.propagate = False
    return logger

# Singleton-like access
parser_logger = setup_parser_logger()
