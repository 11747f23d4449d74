"""
Input/output shape validation.

Raw series input (from the page fetcher):

    {series, baseUrl, issues: [{issueNumber, title, releaseDate?,
     chronologicalPlacementHint?, antagonists: [{name, url?, imageUrl?}]}]}

Serialized series output (consumed by the merger):

    {series, villains: [{id, name, appearances, ...}], timeline: [{issue, ...}], groups?}

Shapes are pydantic models. Every failure is re-raised as our ValidationError
with a machine-readable code and the offending field path
(``issues[3].antagonists[0].name``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, StrictFloat, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from villain_timeline.core.exceptions import ValidationError
from villain_timeline.registry.entities import Antagonist, IssueRecord, RawSeries

# ---------------------------------------------------------------------------
# Raw series input
# ---------------------------------------------------------------------------

class RawAntagonist(BaseModel):
    name: StrictStr
    url: Optional[StrictStr] = None
    imageUrl: Optional[StrictStr] = None


class RawIssue(BaseModel):
    issueNumber: float = Field(strict=True, gt=0)
    title: StrictStr
    releaseDate: Optional[StrictStr] = None
    publicationDate: Optional[StrictStr] = None
    chronologicalPlacementHint: Optional[StrictStr] = None
    antagonists: List[RawAntagonist]

    @field_validator("antagonists", mode="before")
    @classmethod
    def bare_names_as_mentions(cls, value: Any) -> Any:
        # Bare strings are accepted as name-only mentions
        if isinstance(value, list):
            return [{"name": a} if isinstance(a, str) else a for a in value]
        return value


class RawSeriesInput(BaseModel):
    series: StrictStr
    baseUrl: StrictStr
    issues: List[RawIssue] = Field(min_length=1)

    @field_validator("series")
    @classmethod
    def series_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("non-empty string")
        return value


# ---------------------------------------------------------------------------
# Serialized dataset (merge input)
# ---------------------------------------------------------------------------

class SerializedVillain(BaseModel):
    id: StrictStr
    name: StrictStr
    url: Optional[StrictStr] = None
    appearances: List[StrictFloat]


class SerializedTimelineEntry(BaseModel):
    issue: StrictFloat
    releaseDate: Optional[StrictStr] = None
    chronologicalPlacementHint: Optional[StrictStr] = None


class SerializedGroup(BaseModel):
    name: StrictStr
    appearances: List[StrictFloat]


class SerializedDataset(BaseModel):
    series: Optional[StrictStr] = None
    villains: Optional[List[SerializedVillain]] = None
    timeline: Optional[List[SerializedTimelineEntry]] = None
    groups: Optional[List[SerializedGroup]] = None


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

_EXPECTED_TYPES = {
    "string_type": "string",
    "float_type": "number",
    "int_type": "number",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "bool_type": "boolean",
}


def field_path(loc: Tuple[Union[str, int], ...]) -> str:
    """("issues", 3, "antagonists", 0, "name") -> issues[3].antagonists[0].name"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "$"


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """First pydantic error -> missing field / schema violation / invalid format."""
    err = exc.errors()[0]
    path = field_path(tuple(err.get("loc", ())))
    kind = err.get("type", "")
    value = err.get("input")

    if kind == "missing" or (kind in _EXPECTED_TYPES and value is None and path != "$"):
        return ValidationError.missing_required(path)
    if kind in _EXPECTED_TYPES:
        return ValidationError.schema_violation(path, _EXPECTED_TYPES[kind], value)
    return ValidationError.invalid_format(path, err.get("msg", kind))


def _issue_number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_raw_series(data: Any) -> RawSeries:
    """Validate raw per-series input and convert it to typed records."""
    try:
        parsed = RawSeriesInput.model_validate(data)
    except PydanticValidationError as exc:
        raise _to_validation_error(exc) from None

    return RawSeries(
        series=parsed.series,
        base_url=parsed.baseUrl,
        issues=[
            IssueRecord(
                issue_number=_issue_number(issue.issueNumber),
                title=issue.title,
                release_date=issue.releaseDate,
                publication_date=issue.publicationDate,
                chronological_placement_hint=issue.chronologicalPlacementHint,
                antagonists=[
                    Antagonist(name=a.name, url=a.url, image_url=a.imageUrl)
                    for a in issue.antagonists
                ],
            )
            for issue in parsed.issues
        ],
    )


def validate_serialized_dataset(data: Any, *, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Check that a serialized series dataset has the shape the merger reads.
    Returns a shallow copy of the mapping.
    """
    try:
        SerializedDataset.model_validate(data)
    except PydanticValidationError as exc:
        err = _to_validation_error(exc)
        if source:
            err.context.setdefault("source", source)
        raise err from None

    return dict(data)
