import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True  # No namespaces configured, let everything through
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, allowed_namespaces=None) -> logging.Logger:
    """
    Attach a stdout handler to the package logger.

    Modules log through ``logging.getLogger(__name__)`` so their loggers
    ("invoice_reports.features.reports.service", ...) inherit the level and
    handler configured here. Calling this more than once does not stack
    handlers.
    """
    app_logger = logging.getLogger("invoice_reports")
    app_logger.setLevel(getattr(logging, level, logging.INFO))

    for handler in list(app_logger.handlers):
        if getattr(handler, "_invoice_reports_handler", False):
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._invoice_reports_handler = True
    if allowed_namespaces:
        console_handler.addFilter(NamespaceFilter(allowed_namespaces))
    app_logger.addHandler(console_handler)

    # SQL statements are noisy, only show them when debugging
    if app_logger.level <= logging.DEBUG:
        logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)

    return app_logger
