import logging

APP_LOGGER_NAME = 'bpm_estimator'


def setup_logging(debug=False, log_file=None):
    """
    Configure logging for the application.

    Args:
        debug: If True, set log level to DEBUG, otherwise INFO
        log_file: Optional path of a log file written alongside the console
    """
    # Set root logger to a high level to suppress most messages
    logging.getLogger().setLevel(logging.WARNING)

    # Create our app logger
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    app_logger.setLevel(level)

    # Calling twice must not duplicate output
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    # Set format
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setFormatter(formatter)
        app_logger.addHandler(file_handler)

    # Explicitly silence noisy libraries
    for noisy_logger in ['numba', 'audioread', 'matplotlib']:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return app_logger
