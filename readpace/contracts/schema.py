"""
Schema Module: Pydantic models for the ingestion boundary.

Progress records arrive from the backend as loosely-typed dicts. They are
validated here into ProgressSnapshot / TrackedItem values; nothing untyped
is passed into the analytics engine.

Only structural problems are rejected (missing timestamp, non-numeric or
non-finite progress, unknown format). Surprising but well-typed data such
as decreasing progress is accepted and handled by the engine.
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from readpace.models import BookFormat, ItemStatus, ProgressSnapshot, TrackedItem

logger = logging.getLogger(__name__)


class MalformedSnapshotError(ValueError):
    """Raised when a progress record is structurally invalid."""

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        if index is not None:
            message = f"Progress record {index}: {message}"
        super().__init__(message)


def _error_summary(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


# =============================================================================
# RECORD MODELS
# =============================================================================


class SnapshotRecord(BaseModel):
    """One row of progress as returned by the backend."""

    model_config = ConfigDict(extra="ignore")

    id: str
    created_at: datetime
    current_progress: float = Field(ge=0)
    tracked_item_id: str | None = None

    @field_validator("id", "tracked_item_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("current_progress", mode="before")
    @classmethod
    def _numeric_progress(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"progress must be a number, got {type(v).__name__}")
        if not math.isfinite(v):
            raise ValueError("progress must be finite")
        return v

    def to_snapshot(self, tracked_item_id: str | None = None) -> ProgressSnapshot:
        item_id = tracked_item_id or self.tracked_item_id
        if not item_id:
            raise MalformedSnapshotError(f"record {self.id} has no tracked_item_id")
        return ProgressSnapshot(
            id=self.id,
            created_at=self.created_at,
            cumulative_progress=float(self.current_progress),
            tracked_item_id=item_id,
        )


class TrackedItemRecord(BaseModel):
    """A deadline row with its nested progress rows."""

    model_config = ConfigDict(extra="ignore")

    id: str
    format: BookFormat
    total_quantity: float = Field(ge=0)
    deadline_date: date
    flexibility: str | None = None
    book_title: str | None = None
    author: str | None = None
    source: str | None = None
    created_at: datetime | None = None
    status: ItemStatus = ItemStatus.ACTIVE
    progress: list[Any] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("deadline_date", mode="before")
    @classmethod
    def _date_only(cls, v: Any) -> Any:
        # Backend sends full timestamps for deadlines; only the day matters.
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, datetime):
            return v.date()
        return v


# =============================================================================
# PARSERS
# =============================================================================


def parse_snapshot(
    record: dict, tracked_item_id: str | None = None, index: int | None = None
) -> ProgressSnapshot:
    """
    Validate a single progress record.

    Raises:
        MalformedSnapshotError: If the record is structurally invalid.
    """
    if not isinstance(record, dict):
        raise MalformedSnapshotError(f"expected a mapping, got {type(record).__name__}", index)
    try:
        parsed = SnapshotRecord.model_validate(record)
    except ValidationError as exc:
        raise MalformedSnapshotError(_error_summary(exc), index) from exc
    try:
        return parsed.to_snapshot(tracked_item_id)
    except MalformedSnapshotError as exc:
        raise MalformedSnapshotError(str(exc), index) from exc


def parse_snapshots(
    records: Iterable[dict], tracked_item_id: str | None = None, strict: bool = True
) -> list[ProgressSnapshot]:
    """
    Validate a batch of progress records.

    Args:
        records: Raw backend rows.
        tracked_item_id: Owning item, for rows that do not carry it.
        strict: Raise on the first invalid row. When False, invalid rows are
            logged and skipped.

    Returns:
        Validated snapshots in input order.
    """
    snapshots = []
    skipped = []
    for idx, record in enumerate(records):
        try:
            snapshots.append(parse_snapshot(record, tracked_item_id, idx))
        except MalformedSnapshotError as exc:
            if strict:
                raise
            skipped.append((idx, str(exc)))

    if skipped:
        logger.warning("Skipped %d invalid progress record(s)", len(skipped))
        for idx, error in skipped:
            logger.warning("  record %d: %s", idx, error)

    return snapshots


def parse_tracked_item(record: dict, strict: bool = True) -> TrackedItem:
    """
    Validate a deadline record and its nested progress rows.

    Raises:
        MalformedSnapshotError: If the item or (in strict mode) any of its
            progress rows is structurally invalid.
    """
    if not isinstance(record, dict):
        raise MalformedSnapshotError(f"expected a mapping, got {type(record).__name__}")

    raw = dict(record)
    # Supabase-style nested relation name
    if "progress" not in raw and "reading_deadline_progress" in raw:
        raw["progress"] = raw["reading_deadline_progress"] or []

    try:
        parsed = TrackedItemRecord.model_validate(raw)
    except ValidationError as exc:
        raise MalformedSnapshotError(f"tracked item: {_error_summary(exc)}") from exc

    snapshots = parse_snapshots(parsed.progress, tracked_item_id=parsed.id, strict=strict)

    return TrackedItem(
        id=parsed.id,
        format=parsed.format,
        total_quantity=float(parsed.total_quantity),
        deadline_date=parsed.deadline_date,
        flexibility=parsed.flexibility,
        title=parsed.book_title,
        author=parsed.author,
        source=parsed.source,
        created_at=parsed.created_at,
        status=parsed.status,
        snapshots=snapshots,
    )


def parse_tracked_items(records: Iterable[dict], strict: bool = True) -> list[TrackedItem]:
    return [parse_tracked_item(r, strict=strict) for r in records]
