from __future__ import annotations
import logging
from typing import Optional
from .surface import Event, UISurface

logger = logging.getLogger(__name__)

class SearchBox:
    """Search input placeholder: queries are logged, nothing is searched."""

    def __init__(self, surface: UISurface, input_id: str = "search-input", results_id: str = "search-results"):
        self.surface = surface
        self.search_input = surface.by_id(input_id)
        self.search_results = surface.by_id(results_id)
        self.last_query: Optional[str] = None

    def attach(self) -> "SearchBox":
        if self.search_input is not None:
            self.surface.add_listener(self.search_input, "input", self._on_input)
        return self

    def _on_input(self, event: Event) -> None:
        query = event.value
        if query is None and event.target is not None:
            query = event.target.get("value", "")
        self.last_query = query
        logger.info("Search: %s", query)
