import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from assessment_engine.config import get_settings

SERVICE_NAME = "assessment_engine"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


def component_of(logger_name: str) -> str:
    """'assessment_engine.findings.scorer' -> 'findings'; foreign loggers keep their top-level name."""
    parts = logger_name.split(".")
    if parts[0] == SERVICE_NAME and len(parts) > 1:
        return parts[1]
    return parts[0]


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        log_record['component'] = component_of(record.name)
        log_record['module'] = record.module
        log_record['lineno'] = record.lineno


def _has_json_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h.formatter, CustomJsonFormatter) for h in logger.handlers)


def setup_logging(log_level_str: Optional[str] = None) -> logging.Logger:
    """
    Configures structured JSON logging on the root logger.

    The level defaults to ``EngineSettings.log_level`` (``ASSESSMENT_LOG_LEVEL``).
    Safe to call more than once; only one JSON handler is ever installed.
    """
    level_name = (log_level_str or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not _has_json_handler(root_logger):
        log_handler = logging.StreamHandler(sys.stdout)
        log_handler.setFormatter(CustomJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(log_handler)
        root_logger.info(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")
    else:
        root_logger.debug(f"Structured JSON logging already configured; level set to {logging.getLevelName(log_level)}")
    return root_logger
