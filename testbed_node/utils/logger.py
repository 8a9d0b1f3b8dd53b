# testbed_node/utils/logger.py
import logging
import os


def setup_logger(name, level=logging.INFO, log_dir="logs", log_file="node.log"):
    """Sets up a standardized logger for the testbed node."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent adding multiple handlers if logger is already configured
    if not logger.handlers:
        # Console Handler
        console_handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # File Handler
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(log_dir, log_file))
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
