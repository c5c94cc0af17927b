# relchart/store.py
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterator, List, Optional, Tuple

from .errors import DataShapeError
from .model import Record


def _as_str(v: Any) -> str:
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


def _as_opt_str(v: Any) -> Optional[str]:
    s = _as_str(v).strip()
    return s or None


def make_record(origin_index: int, entry: Any) -> Record:
    raw = dict(entry) if isinstance(entry, Mapping) else {}
    return Record(
        origin_index=int(origin_index),
        title=_as_str(raw.get("title")),
        raw_date=raw.get("date"),
        model_type=_as_opt_str(raw.get("modelType")),
        model_size=_as_opt_str(raw.get("modelSize")),
        raw=raw,
    )


class RecordStore:
    """Immutable record list; origin_index is assigned once, in input order."""

    def __init__(self, records: Tuple[Record, ...] = ()) -> None:
        self._records = tuple(records)

    @classmethod
    def load(cls, raw_records: Any) -> "RecordStore":
        if isinstance(raw_records, (str, bytes, bytearray, Mapping)) or not isinstance(raw_records, Sequence):
            raise DataShapeError(f"records must be a sequence; got {type(raw_records).__name__}")
        return cls(tuple(make_record(i, entry) for i, entry in enumerate(raw_records)))

    @classmethod
    def empty(cls) -> "RecordStore":
        return cls(())

    def all(self) -> Tuple[Record, ...]:
        return self._records

    def get(self, origin_index: int) -> Optional[Record]:
        if 0 <= origin_index < len(self._records):
            return self._records[origin_index]
        return None

    def origin_indices(self) -> List[int]:
        return [r.origin_index for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)
