import logging
import os
import sys
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from typing import Optional

from configs import AppConfig

request_name_var: ContextVar[Optional[str]] = ContextVar("request_name", default=None)


def init_app(config: AppConfig, level: str | None = None):
    log_handlers: list[logging.Handler] = []
    log_file = config.LOG_FILE
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                filename=log_file,
                maxBytes=config.LOG_FILE_MAX_SIZE * 1024 * 1024,
                backupCount=config.LOG_FILE_BACKUP_COUNT,
            )
        )

    # stdout carries the report
    sh = logging.StreamHandler(sys.stderr)
    log_handlers.append(sh)

    for handler in log_handlers:
        handler.addFilter(RequestNameFilter())

    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFORMAT,
        handlers=log_handlers,
        force=True,
    )

    apply_request_name_formatter(config)

    # httpx logs every request at INFO
    logging.getLogger("httpx").propagate = False
    logging.getLogger("httpcore").propagate = False


class RequestNameFilter(logging.Filter):
    # Exposes the name of the request being dispatched in the current task,
    # if any, to the logging format.
    def filter(self, record):
        record.request_name = request_name_var.get() or "-"
        return True


class RequestNameFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, "request_name"):
            record.request_name = "-"
        return super().format(record)


def apply_request_name_formatter(config: AppConfig):
    for handler in logging.root.handlers:
        if handler.formatter:
            handler.formatter = RequestNameFormatter(config.LOG_FORMAT, config.LOG_DATEFORMAT)
