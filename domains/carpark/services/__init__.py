"""
Service layer for the Carpark domain.
"""

from .carpark import CarparkService
from .ingestion import CarparkIngestor, IngestionReport, ingest, ingest_with_session_factory
from .upload import CarparkUploadService

__all__ = [
    "CarparkIngestor",
    "CarparkService",
    "CarparkUploadService",
    "IngestionReport",
    "ingest",
    "ingest_with_session_factory",
]
