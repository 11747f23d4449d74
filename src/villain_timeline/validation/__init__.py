from villain_timeline.validation.schemas import (
    validate_raw_series,
    validate_serialized_dataset,
)

__all__ = [
    "validate_raw_series",
    "validate_serialized_dataset",
]
