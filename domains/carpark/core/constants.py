"""
Service Constants (Single Source of Truth)

Static constants fixed at build time; not overridable through the environment.
"""

from __future__ import annotations

# =============================================================================
# Service Identity
# =============================================================================

SERVICE_NAME = "carpark-api"
SERVICE_VERSION = "1.0.0"

# =============================================================================
# Logging Constants (12-Factor App Compliance)
# =============================================================================

ENV_KEY_ENVIRONMENT = "ENVIRONMENT"
ENV_KEY_LOG_LEVEL = "LOG_LEVEL"
ENV_KEY_LOG_FORMAT = "LOG_FORMAT"

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_LOG_LEVEL = "DEBUG"
DEFAULT_LOG_FORMAT = "json"

ECS_VERSION = "8.11.0"

# Default LogRecord attributes excluded from structured labels
EXCLUDED_LOG_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "sqlalchemy.engine",
    "aiosqlite",
    "asyncio",
)

# =============================================================================
# PII Masking Configuration (OWASP compliant)
# =============================================================================

SENSITIVE_FIELD_PATTERNS = frozenset({"password", "secret", "token", "api_key", "authorization"})
MASK_PLACEHOLDER = "***REDACTED***"
MASK_PRESERVE_PREFIX = 4
MASK_PRESERVE_SUFFIX = 4
MASK_MIN_LENGTH = 10

# Extra key carrying the IngestionError of a failed run
INGESTION_ERROR_LOG_KEY = "ingestion_error"

# =============================================================================
# Ingestion Constants
# =============================================================================

INGEST_BATCH_SIZE = 100

CSV_COLUMNS = (
    "car_park_no",
    "address",
    "x_coord",
    "y_coord",
    "short_term_parking",
    "free_parking",
    "night_parking",
    "car_park_decks",
    "gantry_height",
    "car_park_basement",
    "car_park_type",
    "type_of_parking_system",
)

YES_FLAG = "YES"

# =============================================================================
# API Constants
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

NO_FREE_PARKING = "NO"

ALLOWED_UPLOAD_MIME_TYPES = frozenset({"text/csv", "application/csv"})
ALLOWED_UPLOAD_EXTENSIONS = (".csv",)
