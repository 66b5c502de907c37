from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from bs4 import BeautifulSoup, Tag

from .timers import ManualScheduler

Handler = Callable[["Event"], Any]
Analytics = Callable[[str, Dict[str, Any]], Any]

@dataclass
class Event:
    type: str
    target: Any = None
    key: Optional[str] = None
    shift_key: bool = False
    value: Optional[str] = None
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

class Window:
    def __repr__(self) -> str:
        return "<window>"

@runtime_checkable
class Cancellable(Protocol):
    def cancel(self) -> None:
        ...

@runtime_checkable
class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable:
        ...

@runtime_checkable
class Clipboard(Protocol):
    async def write_text(self, text: str) -> None:
        ...

@runtime_checkable
class UISurface(Protocol):
    document: Any
    window: Any
    viewport_width: int
    location: str
    secure_context: bool
    clipboard: Optional[Clipboard]
    analytics: Optional[Analytics]
    scheduler: Scheduler
    active_element: Any

    @property
    def head(self) -> Any: ...

    @property
    def body(self) -> Any: ...

    def by_id(self, element_id: str) -> Any: ...

    def select(self, selector: str) -> List[Any]: ...

    def select_one(self, selector: str) -> Any: ...

    def create_element(self, name: str, attrs: Optional[Dict[str, Any]] = None, text: Optional[str] = None) -> Any: ...

    def parse_fragment(self, html: str) -> Any: ...

    def add_listener(self, target: Any, event_type: str, handler: Handler) -> None: ...

    def dispatch(self, event: Event) -> Event: ...

    def focus(self, element: Any) -> None: ...

    def resize(self, width: int) -> None: ...

    def exec_copy(self, text: str) -> bool: ...

    def spawn(self, awaitable: Awaitable[Any]) -> Any: ...

class SoupSurface:
    def __init__(
        self,
        html: str | BeautifulSoup = "",
        *,
        viewport_width: int = 1024,
        location: str = "http://localhost/",
        secure_context: bool = True,
        clipboard: Optional[Clipboard] = None,
        legacy_copy: Optional[Callable[[str], bool]] = None,
        analytics: Optional[Analytics] = None,
        scheduler: Optional[Scheduler] = None,
        parser: str = "html.parser",
    ):
        self.parser = parser
        self.document = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, parser)
        self.window = Window()
        self.viewport_width = viewport_width
        self.location = location
        self.secure_context = secure_context
        self.clipboard = clipboard
        self.legacy_copy = legacy_copy
        self.analytics = analytics
        self.scheduler = scheduler or ManualScheduler()
        self.active_element: Any = None
        self._listeners: List[Tuple[Any, str, Handler]] = []
        self._tasks: set = set()

    @property
    def head(self) -> Optional[Tag]:
        return self.document.head

    @property
    def body(self) -> Optional[Tag]:
        return self.document.body

    def by_id(self, element_id: str) -> Optional[Tag]:
        return self.document.find(id=element_id)

    def select(self, selector: str) -> List[Tag]:
        return list(self.document.select(selector))

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.document.select_one(selector)

    def create_element(self, name: str, attrs: Optional[Dict[str, Any]] = None, text: Optional[str] = None) -> Tag:
        tag = self.document.new_tag(name, attrs=attrs or {})
        if text is not None:
            tag.string = text
        return tag

    def parse_fragment(self, html: str) -> Optional[Tag]:
        """Parse markup and return its first element, detached."""
        fragment = BeautifulSoup(html, self.parser)
        first = fragment.find(True)
        return first.extract() if first is not None else None

    def add_listener(self, target: Any, event_type: str, handler: Handler) -> None:
        self._listeners.append((target, event_type, handler))

    def _propagation_path(self, target: Any) -> List[Any]:
        # target, its ancestors, then the document; window events stay on the window
        if target is self.window:
            return [self.window]
        if target is None:
            return [self.document]
        path = [target]
        if isinstance(target, Tag):
            path.extend(target.parents)
        if path[-1] is not self.document:
            path.append(self.document)
        return path

    def dispatch(self, event: Event) -> Event:
        for node in self._propagation_path(event.target):
            for target, event_type, handler in list(self._listeners):
                if target is node and event_type == event.type:
                    handler(event)
            if event.propagation_stopped:
                break
        return event

    def focus(self, element: Any) -> None:
        if element is not None:
            self.active_element = element

    def resize(self, width: int) -> None:
        self.viewport_width = width
        self.dispatch(Event("resize", target=self.window))

    def exec_copy(self, text: str) -> bool:
        """Hidden-textarea copy used when the modern clipboard is unavailable."""
        area = self.create_element(
            "textarea",
            {"style": "position: fixed; left: -999999px; top: -999999px"},
            text=text,
        )
        (self.body or self.document).append(area)
        previous = self.active_element
        self.focus(area)
        try:
            return bool(self.legacy_copy(text)) if self.legacy_copy else False
        finally:
            area.extract()
            self.active_element = previous

    def spawn(self, awaitable: Awaitable[Any]) -> Any:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(awaitable)
        task = loop.create_task(awaitable)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def to_html(self) -> str:
        return str(self.document)
