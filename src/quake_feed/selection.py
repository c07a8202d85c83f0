"""Selection tracker: at most one focused event, referenced by id."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from quake_feed.models import Event


@dataclass(frozen=True)
class Selection:
    """Immutable selection state.

    The selection is a lookup key, not a reference. It is never cleared
    automatically when the referenced event leaves the view; callers check
    ``is_valid`` and decide.
    """

    selected_id: str | None = None

    def select(self, event_id: str) -> Selection:
        return Selection(selected_id=event_id)

    def clear(self) -> Selection:
        return Selection()

    def is_valid(self, view: Iterable[Event]) -> bool:
        """True if nothing is selected or the selected id is in *view*."""
        if self.selected_id is None:
            return True
        return any(e.id == self.selected_id for e in view)

    def resolve(self, view: Iterable[Event]) -> Event | None:
        """Return the selected event from *view*, if present."""
        if self.selected_id is None:
            return None
        return next((e for e in view if e.id == self.selected_id), None)
