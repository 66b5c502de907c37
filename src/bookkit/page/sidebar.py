from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from .dom import add_class, closest, contains, inject_style, remove_class, set_style
from .surface import Event, UISurface

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT = 768
RESIZE_DEBOUNCE = 0.15
FOCUS_DELAY = 0.1

FOCUSABLE = 'a[href], button:not([disabled]), [tabindex]:not([tabindex="-1"])'

CLOSE_ICON = [(18, 6, 6, 18), (6, 6, 18, 18)]
HAMBURGER_ICON = [(3, 6, 21, 6), (3, 12, 21, 12), (3, 18, 21, 18)]

OVERLAY_STYLES = """
    .sidebar-overlay {
        position: fixed;
        top: 0;
        left: 0;
        right: 0;
        bottom: 0;
        background-color: rgba(0, 0, 0, 0.5);
        z-index: 850;
        opacity: 0;
        visibility: hidden;
        transition: opacity 0.25s ease-out, visibility 0.25s ease-out;
    }

    .sidebar-overlay.is-visible {
        opacity: 1;
        visibility: visible;
    }

    @media (min-width: 769px) {
        .sidebar-overlay {
            display: none;
        }
    }
"""

@dataclass(frozen=True)
class SidebarMarkup:
    name: str
    sidebar: str
    overlay: str
    toggle: str
    links: str
    first_link: str
    subsections: str
    focus_trap: bool = True
    highlight_active: bool = True

FULL_MARKUP = SidebarMarkup(
    name="full",
    sidebar="#sidebar",
    overlay="#sidebar-overlay",
    toggle=".sidebar-toggle",
    links=".nav-link, .nav-sublink",
    first_link=".nav-link",
    subsections=".nav-subsections",
)

# Pages using other templates pass their own SidebarMarkup.
MARKUPS = (FULL_MARKUP,)

@dataclass(frozen=True)
class SidebarState:
    is_open: bool
    is_mobile: bool

def detect_markup(surface: UISurface, markups: Sequence[SidebarMarkup] = MARKUPS) -> Optional[SidebarMarkup]:
    for markup in markups:
        if surface.select_one(markup.sidebar) is not None:
            return markup
    return None

class Sidebar:
    def __init__(
        self,
        surface: UISurface,
        markup: SidebarMarkup = FULL_MARKUP,
        breakpoint: int = MOBILE_BREAKPOINT,
        resize_delay: float = RESIZE_DEBOUNCE,
    ):
        self.surface = surface
        self.markup = markup
        self.breakpoint = breakpoint
        self.resize_delay = resize_delay

        self.sidebar = surface.select_one(markup.sidebar)
        self.overlay = surface.select_one(markup.overlay)
        self.toggle_button = surface.select_one(markup.toggle)

        self.is_open = False
        self.is_mobile = False
        self._resize_timer: Any = None

    def attach(self) -> "Sidebar":
        inject_style(self.surface, "sidebar-overlay-styles", OVERLAY_STYLES)
        self.check_mobile()
        self._setup_event_listeners()
        self.surface.add_listener(self.surface.window, "resize", self._on_resize)
        if self.markup.focus_trap and self.sidebar is not None:
            self.surface.add_listener(self.sidebar, "keydown", self._trap_focus)
        if self.markup.highlight_active:
            self.highlight_current_page()
        logger.debug("Sidebar attached (%s markup, %s)", self.markup.name, self.state())
        return self

    def check_mobile(self) -> None:
        self.is_mobile = self.surface.viewport_width <= self.breakpoint
        self.is_open = not self.is_mobile
        if self.is_open:
            add_class(self.sidebar, "is-open")
        else:
            remove_class(self.sidebar, "is-open")
        self._update_toggle_button()

    def _setup_event_listeners(self) -> None:
        surface = self.surface
        if self.toggle_button is not None:
            surface.add_listener(self.toggle_button, "click", lambda e: self.toggle())
        if self.overlay is not None:
            surface.add_listener(self.overlay, "click", self._on_overlay_click)
        surface.add_listener(surface.document, "keydown", self._on_escape)
        surface.add_listener(surface.document, "click", self._on_document_click)
        for link in surface.select(self.markup.links):
            surface.add_listener(link, "click", self._on_link_click)

    def _on_overlay_click(self, event: Event) -> None:
        if self.is_mobile:
            self.close()

    def _on_escape(self, event: Event) -> None:
        if event.key == "Escape" and self.is_mobile and self.is_open:
            self.close()

    def _on_document_click(self, event: Event) -> None:
        if not (self.is_mobile and self.is_open):
            return
        if contains(self.sidebar, event.target) or contains(self.toggle_button, event.target):
            return
        self.close()

    def _on_link_click(self, event: Event) -> None:
        if self.is_mobile:
            self.close()

    def _on_resize(self, event: Event) -> None:
        if self._resize_timer is not None:
            self._resize_timer.cancel()
        self._resize_timer = self.surface.scheduler.call_later(self.resize_delay, self._resize_settled)

    def _resize_settled(self) -> None:
        self._resize_timer = None
        self.check_mobile()

    def focusable_elements(self) -> List[Any]:
        if self.sidebar is None:
            return []
        return list(self.sidebar.select(FOCUSABLE))

    def _trap_focus(self, event: Event) -> None:
        if event.key != "Tab" or not self.is_open:
            return
        focusable = self.focusable_elements()
        if not focusable:
            return
        first, last = focusable[0], focusable[-1]
        active = self.surface.active_element
        if event.shift_key and active is first:
            event.prevent_default()
            self.surface.focus(last)
        elif not event.shift_key and active is last:
            event.prevent_default()
            self.surface.focus(first)

    def highlight_current_page(self) -> None:
        location = self.surface.location
        current_path = urlparse(location).path
        for link in self.surface.select(self.markup.links):
            href = link.get("href")
            link_path = urlparse(urljoin(location, href)).path if href is not None else None
            if link_path is not None and (
                link_path == current_path or (link_path != "/" and current_path.startswith(link_path))
            ):
                add_class(link, "active")
                link["aria-current"] = "page"
                section = closest(link, self.markup.subsections)
                if section is not None:
                    set_style(section, "display", "block")
            else:
                remove_class(link, "active")
                if link.has_attr("aria-current"):
                    del link["aria-current"]

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def open(self) -> None:
        self.is_open = True
        add_class(self.sidebar, "is-open")
        add_class(self.overlay, "is-visible")
        if self.is_mobile:
            set_style(self.surface.body, "overflow", "hidden")
        self._update_toggle_button()

        first_link = self.sidebar.select_one(self.markup.first_link) if self.sidebar is not None else None
        if first_link is not None and self.is_mobile:
            self.surface.scheduler.call_later(FOCUS_DELAY, self.surface.focus, first_link)

    def close(self) -> None:
        self.is_open = False
        remove_class(self.sidebar, "is-open")
        remove_class(self.overlay, "is-visible")
        if self.is_mobile:
            set_style(self.surface.body, "overflow", "")
        self._update_toggle_button()

    def _update_toggle_button(self) -> None:
        if self.toggle_button is None:
            return
        self.toggle_button["aria-expanded"] = "true" if self.is_open else "false"
        icon = self.toggle_button.find("svg")
        if icon is None:
            return
        lines = CLOSE_ICON if self.is_open and self.is_mobile else HAMBURGER_ICON
        icon.clear()
        for x1, y1, x2, y2 in lines:
            icon.append(self.surface.create_element(
                "line", {"x1": str(x1), "y1": str(y1), "x2": str(x2), "y2": str(y2)}
            ))

    def state(self) -> SidebarState:
        return SidebarState(is_open=self.is_open, is_mobile=self.is_mobile)
