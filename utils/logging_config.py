"""
Logging setup for the attendance backend.
"""

import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'


def setup_logging(app, max_log_size=10 * 1024 * 1024, backup_count=5):
    """
    Configure the root logger for the Flask app.

    Args:
        app: Flask app instance (LOG_LEVEL and LOG_DIR are read from its config)
        max_log_size: maximum size of one log file, in bytes
        backup_count: number of rotated files to keep
    """
    log_level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Drop handlers from an earlier setup (app factory called more than once)
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_attendance_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler._attendance_handler = True
    root_logger.addHandler(console_handler)

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'attendance.log',
            maxBytes=max_log_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        file_handler._attendance_handler = True
        root_logger.addHandler(file_handler)

        # Separate file for errors (failed notifications end up here)
        error_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'errors.log',
            maxBytes=max_log_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        error_handler._attendance_handler = True
        root_logger.addHandler(error_handler)

    # Quieter third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    app.logger.setLevel(log_level)
    app.logger.info("[INIT] Logging configured (level=%s, dir=%s)",
                    logging.getLevelName(log_level), log_dir or "-")
