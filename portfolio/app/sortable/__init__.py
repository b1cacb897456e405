"""Client-side reordering of admin lists (sort mode) and the HTTP calls that persist it."""
from portfolio.app.sortable.engine import SortableList, SortState, SortStateError
from portfolio.app.sortable.persisters import HttpBatchPersister, HttpItemPersister, parse_tags

__all__ = [
    "HttpBatchPersister",
    "HttpItemPersister",
    "SortableList",
    "SortState",
    "SortStateError",
    "parse_tags",
]
