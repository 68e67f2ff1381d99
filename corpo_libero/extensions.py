"""
Extensiones Flask compartidas (db, logging).
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

# Instancia global de SQLAlchemy, se inicializa en create_app()
db = SQLAlchemy()


# Atributos propios de LogRecord: todo lo demás vino por `extra`
STANDARD_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    Formatter que produce una línea JSON por registro.

    Campos:
    - timestamp: ISO 8601 en UTC
    - level, logger, module, message
    - exc_info: stacktrace si lo hay
    - extra: campos pasados con extra={...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in STANDARD_RECORD_ATTRS
        }
        if extra_fields:
            log_record["extra"] = extra_fields

        return json.dumps(log_record, ensure_ascii=False, default=str)


def init_extensions(app: Flask) -> None:
    """Inicializa las extensiones ligadas a la app. Llamada desde create_app()."""
    db.init_app(app)
    _init_logging(app)


_FILE_HANDLER_NAME = "corpo_libero.file"
_CONSOLE_HANDLER_NAME = "corpo_libero.console"


def _init_logging(app: Flask) -> None:
    """
    Instala en el root logger un RotatingFileHandler (LOG_DIR/LOG_FILE_NAME)
    y un handler de consola, ambos con JsonFormatter.

    create_app se llama una vez por test: si los handlers ya están
    instalados solo se actualiza el nivel.
    """
    log_dir = app.config.get("LOG_DIR")
    log_file_name = app.config.get("LOG_FILE_NAME", "app.log")
    log_level_name = app.config.get("LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_file_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    installed = {handler.get_name() for handler in root_logger.handlers}
    if _FILE_HANDLER_NAME not in installed:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

        json_formatter = JsonFormatter()
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.set_name(_FILE_HANDLER_NAME)
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER_NAME)
        for handler in (file_handler, console_handler):
            handler.setFormatter(json_formatter)
            root_logger.addHandler(handler)

    for handler in root_logger.handlers:
        handler.setLevel(log_level)
    app.logger.setLevel(log_level)

    app.logger.info(
        "Logging JSON listo",
        extra={"component": "logging", "log_path": log_path, "level": log_level_name},
    )
