"""
Partial-profile merging.

Merge rule: first non-empty wins. A field already holding real data is
never replaced; a field that is None, blank, a sentinel string or an empty
list is filled from the newer partial.
"""

from functools import reduce
from typing import Iterable, Optional

from app.schemas.schemas import PartialProfile, is_blank


def merge_partials(base: Optional[PartialProfile], new: Optional[PartialProfile]) -> Optional[PartialProfile]:
    if base is None:
        return new.model_copy(deep=True) if new is not None else None
    if new is None:
        return base

    merged = base.model_copy(deep=True)
    for field in PartialProfile.model_fields:
        if field == "source":
            continue
        current = getattr(merged, field)
        incoming = getattr(new, field)
        if is_blank(current) and not is_blank(incoming):
            setattr(merged, field, incoming)
    return merged


def merge_all(partials: Iterable[Optional[PartialProfile]]) -> Optional[PartialProfile]:
    """Fold a priority-ordered sequence of partials into one."""
    return reduce(merge_partials, partials, None)
