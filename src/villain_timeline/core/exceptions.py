from __future__ import annotations

from typing import Any, Dict, Optional


class TimelineError(Exception):
    """Base exception for all villain timeline failures."""

    default_code = "TIMELINE_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.context: Dict[str, Any] = dict(context or {})

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "context": self.context}


class ValidationError(TimelineError):
    """Raised when an input dataset is malformed or incomplete."""

    default_code = "VALIDATION_ERROR"

    @classmethod
    def schema_violation(
        cls, field_path: str, expected_type: str, actual_value: Any
    ) -> "ValidationError":
        return cls(
            f'Schema violation at "{field_path}": expected {expected_type}, '
            f"got {type(actual_value).__name__}",
            "VALIDATION_SCHEMA_ERROR",
            {
                "fieldPath": field_path,
                "expectedType": expected_type,
                "actualValue": actual_value,
            },
        )

    @classmethod
    def missing_required(cls, field_name: str) -> "ValidationError":
        return cls(
            f"Missing required field: {field_name}",
            "VALIDATION_MISSING_FIELD",
            {"fieldName": field_name},
        )

    @classmethod
    def invalid_format(cls, field_name: str, fmt: str) -> "ValidationError":
        return cls(
            f'Invalid format for "{field_name}": expected {fmt}',
            "VALIDATION_INVALID_FORMAT",
            {"fieldName": field_name, "format": fmt},
        )


class ProcessingError(TimelineError):
    """Raised for fatal failures while transforming or merging data."""

    default_code = "PROCESSING_ERROR"

    @classmethod
    def merge_conflict(cls, entity_id: str, reason: str) -> "ProcessingError":
        return cls(
            f'Merge conflict for entity "{entity_id}": {reason}',
            "PROCESSING_MERGE_CONFLICT",
            {"entityId": entity_id, "reason": reason},
        )

    @classmethod
    def data_inconsistency(cls, description: str) -> "ProcessingError":
        return cls(
            f"Data inconsistency detected: {description}",
            "PROCESSING_DATA_INCONSISTENCY",
            {"description": description},
        )

    @classmethod
    def no_datasets(cls) -> "ProcessingError":
        return cls(
            "Merge requires at least one input dataset",
            "PROCESSING_NO_DATASETS",
        )


class DataIOError(TimelineError):
    """Raised when dataset files cannot be located, read, or written."""

    default_code = "IO_ERROR"

    @classmethod
    def file_not_found(cls, file_path: str) -> "DataIOError":
        return cls(
            f"File not found: {file_path}",
            "IO_FILE_NOT_FOUND",
            {"filePath": str(file_path)},
        )

    @classmethod
    def read_failed(cls, file_path: str, reason: str) -> "DataIOError":
        return cls(
            f"Failed to read {file_path}: {reason}",
            "IO_READ_FAILED",
            {"filePath": str(file_path), "reason": reason},
        )

    @classmethod
    def write_failed(cls, file_path: str, reason: str) -> "DataIOError":
        return cls(
            f"Failed to write {file_path}: {reason}",
            "IO_WRITE_FAILED",
            {"filePath": str(file_path), "reason": reason},
        )


class PipelineError(TimelineError):
    """Raised when a pipeline run fails for an unexpected reason."""

    default_code = "PIPELINE_ERROR"
