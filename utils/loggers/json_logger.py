from datetime import datetime
import os
import logging
import json
import sys


class JsonLogger(logging.Formatter):
    """Formatter that renders each log record as a single JSON object."""

    def format(self, record):
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.now().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno,
            'function': record.funcName
        }

        # Structured payloads passed through `extra`
        if hasattr(record, 'metrics'):
            log_data['metrics'] = record.metrics

        if hasattr(record, 'operation'):
            log_data['operation'] = record.operation

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_data, default=str)


def determine_log_path(log_file):
    """
    Make sure the directory of the log file exists.

    Args:
        log_file (str): Path to the log file

    Returns:
        str: Path to use for logging
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    return log_file


def get_logger(logger_name, log_file=None, clear_existing=True, console_json=True,
               level=logging.INFO):
    """
    Get a configured logger instance with JSON formatting.

    Args:
        logger_name (str): Name for the logger
        log_file (str, optional): Path to the log file; no file handler when None
        clear_existing (bool): Whether to clear existing handlers
        console_json (bool): Whether to use JSON formatting for console output
        level (int or str): Level for the console handler

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)

    if clear_existing and logger.handlers:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    if logger.handlers:
        return logger

    # Console output goes to stderr so generated text on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if console_json:
        console_handler.setFormatter(JsonLogger())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(determine_log_path(log_file))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JsonLogger())
        logger.addHandler(file_handler)

    return logger


def log_json(logger, message, data=None, level=logging.INFO, operation=None):
    """
    Log a message with optional structured data attached as `metrics`.

    Args:
        logger (logging.Logger): Logger instance
        message (str): Log message
        data (dict, optional): Metrics to include in the log
        level (int): Logging level of the record
        operation (str, optional): Operation name to include in the log
    """
    extra = {}
    if data is not None:
        extra["metrics"] = data
    if operation is not None:
        extra["operation"] = operation
    logger.log(level, message, extra=extra or None)
