"""Domain models for the CSV user importer.

This package contains the domain model classes shared by the importer
pipeline, the persistence layer and the batch orchestrator.
"""

from .config_models import DatabaseConfig, ImportConfig
from .csv_file import CsvFile, FileStatus
from .error_record import ErrorRecord
from .import_report import ImportReport, ValidationOutcome
from .processing_result import FileStat, ProcessingResult
from .row_data import RowData
from .user_record import UserRecord

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    # Importer models
    "ImportReport",
    "RowData",
    "UserRecord",
    "ValidationOutcome",
    # Processing models
    "CsvFile",
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "ProcessingResult",
]
