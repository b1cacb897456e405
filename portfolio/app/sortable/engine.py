"""
Sort mode for admin lists.

Entering sort mode snapshots the list into a private working copy; drag and
step moves only touch that copy, keeping sort_order equal to the position
(0..n-1). Saving sends every row back through the caller's persist function,
refreshes, and leaves sort mode. Cancel just drops the copy.

Persisting resends each known row whole, so an edit another admin made during
the session can be overwritten.
"""
from __future__ import annotations

import copy
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from portfolio.app.core.logging_config import get_logger

logger = get_logger("sortable")

Item = dict[str, Any]


class SortState(str, Enum):
    IDLE = "idle"
    SORTING = "sorting"
    SAVING = "saving"


class SortStateError(RuntimeError):
    """Operation not valid in the current sort state."""


def _renumber(items: list[Item]) -> list[Item]:
    for i, item in enumerate(items):
        item["sort_order"] = i
    return items


class SortableList:
    """
    Reordering session over rows shaped like `{"id": ..., "sort_order": ...}`.

    Args:
        persist: called once per row on save with the full (optionally transformed) record
        on_refresh: called after every row was persisted, e.g. to reload the list
        filter_for_sort: default filter applied on enter_sort_mode (e.g. only visible rows)
        transform_before_save: default reshaping applied to each row on save
    """

    def __init__(
        self,
        persist: Callable[[Item], Any],
        on_refresh: Optional[Callable[[], Any]] = None,
        filter_for_sort: Optional[Callable[[Item], bool]] = None,
        transform_before_save: Optional[Callable[[Item], Item]] = None,
    ):
        self.persist = persist
        self.on_refresh = on_refresh
        self.filter_for_sort = filter_for_sort
        self.transform_before_save = transform_before_save
        self.state = SortState.IDLE
        self._items: list[Item] = []
        self._drag_from: Optional[int] = None
        self._drag_over: Optional[int] = None

    @property
    def sort_mode(self) -> bool:
        return self.state is not SortState.IDLE

    @property
    def saving(self) -> bool:
        return self.state is SortState.SAVING

    @property
    def items(self) -> list[Item]:
        """Working copy in current order."""
        return self._items

    def _require(self, state: SortState) -> None:
        if self.state is not state:
            raise SortStateError(f"expected state {state.value}, current state is {self.state.value}")

    def enter_sort_mode(
        self,
        items: Iterable[Item],
        filter_predicate: Optional[Callable[[Item], bool]] = None,
    ) -> list[Item]:
        """
        Snapshot `items` (deep copy) and number them 0..n-1 in the given order.

        Existing sort_order values are not kept: gaps and ties collapse into positions.
        """
        self._require(SortState.IDLE)
        predicate = filter_predicate or self.filter_for_sort
        selected = [item for item in items if predicate is None or predicate(item)]
        self._items = _renumber([copy.deepcopy(dict(item)) for item in selected])
        self.state = SortState.SORTING
        logger.debug("Sort mode entered items=%d", len(self._items))
        return self._items

    def cancel_sort_mode(self) -> None:
        self._require(SortState.SORTING)
        self._reset()

    def reorder_by_drag(self, from_index: int, to_index: int) -> list[Item]:
        """Move the row at from_index so it ends up at to_index."""
        self._require(SortState.SORTING)
        size = len(self._items)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise IndexError(f"drag {from_index} -> {to_index} out of range for {size} items")
        item = self._items.pop(from_index)
        self._items.insert(to_index, item)
        return _renumber(self._items)

    def reorder_by_step(self, index: int, direction: int) -> list[Item]:
        """Swap the row with its neighbour above (-1) or below (+1); no-op at either end."""
        self._require(SortState.SORTING)
        if direction not in (-1, 1):
            raise ValueError("direction must be -1 or 1")
        target = index + direction
        if not (0 <= index < len(self._items)) or not (0 <= target < len(self._items)):
            return self._items
        self._items[index], self._items[target] = self._items[target], self._items[index]
        return _renumber(self._items)

    # Pointer-style drag: start on one row, hover others, drop.

    def drag_start(self, index: int) -> None:
        self._drag_from = index

    def drag_enter(self, index: int) -> None:
        self._drag_over = index

    def drag_end(self) -> list[Item]:
        """Apply the pending drag, if both ends were seen."""
        try:
            if self._drag_from is None or self._drag_over is None:
                return self._items
            return self.reorder_by_drag(self._drag_from, self._drag_over)
        finally:
            self._drag_from = None
            self._drag_over = None

    def save(self, transform_before_send: Optional[Callable[[Item], Item]] = None) -> int:
        """
        Persist every row in order, one call each, then refresh and leave sort mode.

        If a persist (or the refresh) raises, the working copy is kept, sort mode stays
        active and the error propagates; rows already sent are not rolled back.
        """
        transform = transform_before_send or self.transform_before_save

        def send_all() -> int:
            for item in self._items:
                record = dict(item)
                self.persist(transform(record) if transform else record)
            return len(self._items)

        return self._run_save(send_all)

    def save_batch(self, persist_batch: Callable[[list[Item]], Any]) -> int:
        """Persist the whole order as one `[{id, sort_order}, ...]` call (single transaction server-side)."""
        order = [{"id": item["id"], "sort_order": item["sort_order"]} for item in self._items]

        def send_batch() -> int:
            persist_batch(order)
            return len(order)

        return self._run_save(send_batch)

    def _run_save(self, send: Callable[[], int]) -> int:
        self._require(SortState.SORTING)
        self.state = SortState.SAVING
        try:
            count = send()
            if self.on_refresh is not None:
                self.on_refresh()
        except Exception:
            self.state = SortState.SORTING
            logger.warning("Sort order save failed, sort mode kept items=%d", len(self._items))
            raise
        logger.info("Sort order saved items=%d", count)
        self._reset()
        return count

    def _reset(self) -> None:
        self._items = []
        self._drag_from = None
        self._drag_over = None
        self.state = SortState.IDLE
