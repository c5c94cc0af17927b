# relchart/filters.py
from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .categories import (
    ABOVE,
    AT_MOST,
    CATEGORY_OPTIONS,
    OTHER_CATEGORY,
    SIZE_OPTIONS,
    at_most_lower_bound,
)
from .errors import SizeParseFailure
from .model import Category, FilterState, Record, SizeBucket
from .store import RecordStore
from .util.console import eprint, obs_enabled

_SIZE_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*B", re.IGNORECASE)


def parse_model_sizes(model_size: Any) -> List[float]:
    """Parse a free-form modelSize into B-values.

    "7B, 13B (instruct)" -> [7.0, 13.0]. Anything after the first "(" is
    ignored; segments without a "<number>B" are dropped.
    """
    if not model_size or not isinstance(model_size, str):
        return []
    head = model_size.split("(", 1)[0]
    out: List[float] = []
    for part in head.split(","):
        m = _SIZE_RE.search(part)
        if m:
            out.append(float(m.group(1)))
    return out


def parse_model_sizes_strict(model_size: Any) -> List[float]:
    sizes = parse_model_sizes(model_size)
    if not sizes:
        raise SizeParseFailure(f"no size values in {model_size!r}")
    return sizes


def matched_categories(model_type: Optional[str], categories: Sequence[Category] = CATEGORY_OPTIONS) -> Tuple[str, ...]:
    """Ordered table scan: defined categories first, `other` only if none matched."""
    mt = (model_type or "").lower()
    hits: List[str] = []
    has_other = False
    for c in categories:
        if c.key == OTHER_CATEGORY:
            has_other = True
            continue
        if any(kw.lower() in mt for kw in c.keywords):
            hits.append(c.key)
    if not hits and has_other:
        hits.append(OTHER_CATEGORY)
    return tuple(hits)


def matches_text(record: Record, query: str) -> bool:
    if not query:
        return True
    return query in record.title.lower()


def matches_categories(record: Record, selected: Iterable[str], categories: Sequence[Category] = CATEGORY_OPTIONS) -> bool:
    sel = set(selected)
    if not sel:
        return True
    return any(k in sel for k in matched_categories(record.model_type, categories))


def matches_size(
    record: Record,
    bucket: Optional[SizeBucket],
    options: Tuple[SizeBucket, ...] = SIZE_OPTIONS,
) -> bool:
    if bucket is None:
        return True
    try:
        sizes = parse_model_sizes_strict(record.model_size)
    except SizeParseFailure as ex:
        if obs_enabled():
            eprint(f"[relchart.filters] WARN: size excluded origin={record.origin_index} ({ex})")
        return False

    threshold = float(bucket.threshold_b)
    if bucket.kind == AT_MOST:
        lower = at_most_lower_bound(bucket, options)
        return any(lower < v <= threshold for v in sizes)
    if bucket.kind == ABOVE:
        return any(v > threshold for v in sizes)
    return True


def normalize_query(s: Any) -> str:
    return ("" if s is None else str(s)).strip().lower()


def filter_records(
    records: Iterable[Record],
    state: FilterState,
    *,
    categories: Sequence[Category] = CATEGORY_OPTIONS,
    size_options: Tuple[SizeBucket, ...] = SIZE_OPTIONS,
) -> Tuple[Record, ...]:
    """Apply all three predicates, keeping input order."""
    return tuple(
        r
        for r in records
        if matches_text(r, state.text_query)
        and matches_categories(r, state.selected_categories, categories)
        and matches_size(r, state.size_bucket, size_options)
    )


class FilterEngine:
    """Composable filter state over a RecordStore.

    Every setter is one atomic state transition followed by exactly one
    recompute(); recompute() notifies the registered collaborator.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        categories: Sequence[Category] = CATEGORY_OPTIONS,
        size_options: Tuple[SizeBucket, ...] = SIZE_OPTIONS,
        on_recompute: Optional[Callable[[Tuple[Record, ...]], Any]] = None,
    ) -> None:
        self.store = store
        self.categories = tuple(categories)
        self.size_options = tuple(size_options)
        self._category_keys = {c.key for c in self.categories}
        self._state = FilterState()
        self._filtered: Tuple[Record, ...] = store.all()
        self._on_recompute = on_recompute

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def filtered(self) -> Tuple[Record, ...]:
        return self._filtered

    def set_on_recompute(self, cb: Optional[Callable[[Tuple[Record, ...]], Any]]) -> None:
        self._on_recompute = cb

    def _transition(self, state: FilterState) -> Tuple[Record, ...]:
        self._state = state
        return self.recompute()

    def set_text_query(self, s: Any) -> Tuple[Record, ...]:
        return self._transition(replace(self._state, text_query=normalize_query(s)))

    def toggle_category(self, key: str) -> Tuple[Record, ...]:
        if key not in self._category_keys:
            raise KeyError(key)
        sel = set(self._state.selected_categories)
        if key in sel:
            sel.discard(key)
        else:
            sel.add(key)
        return self._transition(replace(self._state, selected_categories=frozenset(sel)))

    def set_size_bucket(self, bucket: Optional[SizeBucket]) -> Tuple[Record, ...]:
        return self._transition(replace(self._state, size_bucket=bucket))

    def select_size_label(self, label: Optional[str]) -> Tuple[Record, ...]:
        if not label:
            return self.set_size_bucket(None)
        for b in self.size_options:
            if b.label == label:
                return self.set_size_bucket(b)
        raise KeyError(label)

    def reset(self) -> Tuple[Record, ...]:
        return self._transition(FilterState())

    def evaluate(self, record: Record) -> bool:
        st = self._state
        return (
            matches_text(record, st.text_query)
            and matches_categories(record, st.selected_categories, self.categories)
            and matches_size(record, st.size_bucket, self.size_options)
        )

    def recompute(self) -> Tuple[Record, ...]:
        self._filtered = tuple(r for r in self.store.all() if self.evaluate(r))
        if self._on_recompute is not None:
            self._on_recompute(self._filtered)
        return self._filtered

    def counts(self) -> Dict[str, int]:
        """Match counts over the whole store, keyed by category key and bucket label."""
        out: Dict[str, int] = {c.key: 0 for c in self.categories}
        for b in self.size_options:
            out[b.label] = 0
        for r in self.store.all():
            for k in matched_categories(r.model_type, self.categories):
                out[k] += 1
            for b in self.size_options:
                if r.model_size and parse_model_sizes(r.model_size) and matches_size(r, b, self.size_options):
                    out[b.label] += 1
        return out
