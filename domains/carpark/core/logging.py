"""
Structured logging for the Carpark service (ECS JSON on stdout).

Ingestion failures are logged with the failing ``IngestionError`` under the
``ingestion_error`` extra key. The formatters turn it into ECS ``error.*``
fields (JSON) or a ``line/column`` suffix (text), so a rejected CSV can be
traced to the offending cell without a stack trace.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from domains.carpark.core.constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    ECS_VERSION,
    ENV_KEY_ENVIRONMENT,
    ENV_KEY_LOG_FORMAT,
    ENV_KEY_LOG_LEVEL,
    EXCLUDED_LOG_RECORD_ATTRS,
    INGESTION_ERROR_LOG_KEY,
    MASK_MIN_LENGTH,
    MASK_PLACEHOLDER,
    MASK_PRESERVE_PREFIX,
    MASK_PRESERVE_SUFFIX,
    NOISY_LOGGERS,
    SENSITIVE_FIELD_PATTERNS,
    SERVICE_NAME,
    SERVICE_VERSION,
)
from domains.carpark.core.exceptions import IngestionError

TEXT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def mask_sensitive_data(data: Any) -> Any:
    """Recursively mask values whose key looks like a credential.

    Long values keep a short prefix and suffix (``Bear...IsIn``); short ones
    and ``None`` become the placeholder.
    """
    if isinstance(data, list):
        return [mask_sensitive_data(item) for item in data]
    if not isinstance(data, dict):
        return data

    masked = {}
    for key, value in data.items():
        if any(pattern in str(key).lower() for pattern in SENSITIVE_FIELD_PATTERNS):
            text = "" if value is None else str(value)
            masked[key] = (
                f"{text[:MASK_PRESERVE_PREFIX]}...{text[-MASK_PRESERVE_SUFFIX:]}"
                if len(text) > MASK_MIN_LENGTH
                else MASK_PLACEHOLDER
            )
        else:
            masked[key] = mask_sensitive_data(value)
    return masked


def ingestion_error_fields(exc: IngestionError) -> dict[str, Any]:
    """ECS ``error.*`` fields locating an ingestion failure in its source."""
    fields: dict[str, Any] = {
        "error.type": type(exc).__name__,
        "error.message": str(exc),
        "error.reason": exc.reason,
    }
    if exc.line is not None:
        fields["error.line"] = exc.line
    if exc.column is not None:
        fields["error.column"] = exc.column
    return fields


def _record_ingestion_error(record: logging.LogRecord) -> IngestionError | None:
    error = getattr(record, INGESTION_ERROR_LOG_KEY, None)
    if isinstance(error, IngestionError):
        return error
    if record.exc_info and isinstance(record.exc_info[1], IngestionError):
        return record.exc_info[1]
    return None


class ECSJsonFormatter(logging.Formatter):
    """Elastic Common Schema (ECS) JSON formatter."""

    def __init__(
        self,
        service_name: str = SERVICE_NAME,
        service_version: str = SERVICE_VERSION,
        environment: str = DEFAULT_ENVIRONMENT,
    ):
        super().__init__()
        self.service = {
            "service.name": service_name,
            "service.version": service_version,
            "service.environment": environment,
        }

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "@timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "message": record.getMessage(),
            "log.level": record.levelname.lower(),
            "log.logger": record.name,
            "ecs.version": ECS_VERSION,
            **self.service,
        }

        if record.exc_info and record.exc_info[0] is not None:
            document["error.type"] = record.exc_info[0].__name__
            document["error.message"] = str(record.exc_info[1])
            document["error.stack_trace"] = self.formatException(record.exc_info)

        ingestion_error = _record_ingestion_error(record)
        if ingestion_error is not None:
            document.update(ingestion_error_fields(ingestion_error))

        labels = {
            key: value
            for key, value in record.__dict__.items()
            if key not in EXCLUDED_LOG_RECORD_ATTRS and key != INGESTION_ERROR_LOG_KEY
        }
        if "duration_ms" in labels:
            # ECS event.duration is in nanoseconds
            document["event.duration"] = int(labels["duration_ms"] * 1_000_000)
        if labels:
            document["labels"] = mask_sensitive_data(labels)

        return json.dumps(document, ensure_ascii=False, default=str)


class IngestionTextFormatter(logging.Formatter):
    """Plain text formatter that appends the failing line and column."""

    def __init__(self):
        super().__init__(TEXT_LOG_FORMAT, datefmt=TEXT_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        error = getattr(record, INGESTION_ERROR_LOG_KEY, None)
        if isinstance(error, IngestionError):
            text = f"{text} [{type(error).__name__}: {error}]"
        return text


def configure_logging(
    service_name: str = SERVICE_NAME,
    service_version: str = SERVICE_VERSION,
    log_level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        service_name: service name reported in every JSON record
        service_version: service version reported in every JSON record
        log_level: DEBUG, INFO, WARNING or ERROR (defaults to LOG_LEVEL)
        json_format: emit ECS JSON instead of text (defaults to LOG_FORMAT)
    """
    level_name = (log_level or os.getenv(ENV_KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.DEBUG
    if json_format is None:
        json_format = os.getenv(ENV_KEY_LOG_FORMAT, DEFAULT_LOG_FORMAT) == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if json_format:
        environment = os.getenv(ENV_KEY_ENVIRONMENT, DEFAULT_ENVIRONMENT)
        handler.setFormatter(ECSJsonFormatter(service_name, service_version, environment))
    else:
        handler.setFormatter(IngestionTextFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
