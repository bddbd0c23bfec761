# Area: Handlers
"""
edugame._handlers.exploration — Exploration section handler
===========================================================

The player moves between revealed locations and picks up the
collectibles found there. Hidden locations are revealed once every
initially visible location has been visited. Collecting awards the
collectible's points and adds it to the inventory.

The section completes when every collectible is collected or the
player calls ``finish()``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .._spec.models import ExplorationLocation
from .base import BaseSectionHandler, HandlerContext


class ExplorationHandler(BaseSectionHandler):
    section_type = "exploration"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.locations = {loc.id: loc for loc in self.content.locations}
        self.collectibles = {c.id: c for c in self.content.collectibles}
        self.revealed: List[str] = [loc.id for loc in self.content.locations if loc.visible]
        self.current_location = self.content.start_location
        self.visited: List[str] = []
        self.collected: List[str] = []

    def enter(self) -> None:
        if self.current_location not in self.locations:
            self.logger.warning(f"Exploration '{self.section.id}' has no start location")
            self._complete()
            return
        if self.current_location not in self.revealed:
            self.revealed.append(self.current_location)
        self._arrive(self.current_location)

    @property
    def location(self) -> Optional[ExplorationLocation]:
        return self.locations.get(self.current_location)

    def visit(self, location_id: str) -> bool:
        if not self._guard_active("visit"):
            return False
        if location_id not in self.revealed:
            self.logger.warning(f"Location '{location_id}' is not reachable")
            return False
        self._arrive(location_id)
        return True

    def _arrive(self, location_id: str) -> None:
        self.current_location = location_id
        self._start_item_clock()
        if location_id in self.visited:
            return
        self.visited.append(location_id)

        event = self.locations[location_id].on_visit
        if event is not None and event.type == "item" and event.content:
            self.callbacks.on_add_item(str(event.content))

        hidden = [lid for lid in self.locations if lid not in self.revealed]
        if hidden and all(lid in self.visited for lid in self.revealed):
            self.revealed.extend(hidden)
            self.logger.info(f"Revealed hidden locations: {hidden}")

    def collectibles_here(self) -> List[str]:
        return [
            cid for cid, c in self.collectibles.items()
            if c.location_id == self.current_location and cid not in self.collected
        ]

    def collect(self, collectible_id: str) -> Optional[str]:
        """Pick up a collectible at the current location; returns its knowledge text."""
        if not self._guard_active("collect"):
            return None
        if collectible_id not in self.collectibles_here():
            self.logger.warning(
                f"Collectible '{collectible_id}' is not available at '{self.current_location}'"
            )
            return None
        item = self.collectibles[collectible_id]
        self.collected.append(collectible_id)
        self.callbacks.on_add_item(collectible_id)
        self._answer(collectible_id, "collected", True, item.points)
        if len(self.collected) >= len(self.collectibles):
            self._complete()
        return item.knowledge

    def finish(self) -> None:
        if self._guard_active("finish"):
            self._complete()

    def view(self) -> Dict[str, Any]:
        location = self.location
        return {
            "type": self.section_type,
            "world": self.content.world.name,
            "location": location.model_dump(by_alias=True) if location else None,
            "reachable": [
                {"id": lid, "name": self.locations[lid].name, "visited": lid in self.visited}
                for lid in self.revealed
            ],
            "collectiblesHere": self.collectibles_here(),
            "collected": len(self.collected),
            "total": len(self.collectibles),
        }
