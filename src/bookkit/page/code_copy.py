from __future__ import annotations

import copy
import enum
import logging
import re
from typing import Any, List, Optional, Tuple

from ..errors import ClipboardError
from .dom import add_class, classes, closest, has_class, inject_style, remove_class, set_style
from .surface import Event, UISurface

logger = logging.getLogger(__name__)

RESET_DELAY = 2.0
IDLE_TEXT = "Copy"
SUCCESS_TEXT = "Copied!"
ERROR_TEXT = "Failed"

LANGUAGE_RE = re.compile(r"language-(\w+)")

LANGUAGE_NAMES = {
    "js": "JavaScript",
    "javascript": "JavaScript",
    "ts": "TypeScript",
    "typescript": "TypeScript",
    "py": "Python",
    "python": "Python",
    "rb": "Ruby",
    "ruby": "Ruby",
    "php": "PHP",
    "java": "Java",
    "c": "C",
    "cpp": "C++",
    "cs": "C#",
    "go": "Go",
    "rs": "Rust",
    "rust": "Rust",
    "sh": "Shell",
    "bash": "Bash",
    "zsh": "Zsh",
    "powershell": "PowerShell",
    "sql": "SQL",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sass": "Sass",
    "less": "Less",
    "json": "JSON",
    "xml": "XML",
    "yaml": "YAML",
    "yml": "YAML",
    "toml": "TOML",
    "ini": "INI",
    "dockerfile": "Dockerfile",
    "docker": "Docker",
    "nginx": "Nginx",
    "apache": "Apache",
    "md": "Markdown",
    "markdown": "Markdown",
}

BUTTON_HTML = """<button class="code-copy-button" aria-label="Copy code to clipboard" data-code-index="{index}">
<svg class="copy-icon" width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2"><rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect><path d="M5 15H4a2 2 0 01-2-2V4a2 2 0 012-2h9a2 2 0 012 2v1"></path></svg>
<svg class="check-icon" width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" style="display: none"><polyline points="20,6 9,17 4,12"></polyline></svg>
<span class="copy-text">Copy</span>
</button>"""

COPY_STYLES = """
    .code-block-wrapper { position: relative; margin: var(--space-4) 0; }
    .code-copy-button {
        position: absolute;
        top: var(--space-2);
        right: var(--space-2);
        z-index: 10;
        opacity: 0;
        cursor: pointer;
    }
    pre:hover .code-copy-button, .code-copy-button:focus { opacity: 1; }
    .code-copy-button.copy-success { background: var(--color-success); color: white; }
    .code-copy-button.copy-error { background: var(--color-danger); color: white; }
    .code-language-label {
        position: absolute;
        top: var(--space-2);
        left: var(--space-2);
        text-transform: uppercase;
        z-index: 10;
    }
    @media (max-width: 768px) {
        .code-copy-button, .code-language-label { position: relative; opacity: 1; }
    }
    @media (prefers-reduced-motion: reduce) {
        .code-copy-button { transition: none; }
    }
"""

class CopyStatus(str, enum.Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"

def language_display_name(lang: str) -> str:
    return LANGUAGE_NAMES.get(lang.lower(), lang.upper())

def detect_language(code: Any) -> Optional[str]:
    match = LANGUAGE_RE.search(" ".join(classes(code)))
    return match.group(1) if match else None

def clean_code_text(code: Any) -> str:
    """Text of a code element without line numbers or highlighting markup."""
    clone = copy.copy(code)
    for number in clone.select(".line-number, .lineno"):
        number.extract()
    for span in clone.select('span[class*="highlight"], span[class*="token"]'):
        span.replace_with(span.get_text())
    text = clone.get_text()
    return text.replace("\r\n", "\n").replace("\r", "\n").strip()

class CodeCopy:
    def __init__(self, surface: UISurface, reset_delay: float = RESET_DELAY):
        self.surface = surface
        self.reset_delay = reset_delay
        # (button, handle) pairs; a button is matched by identity, not by value
        self._reset_timers: List[Tuple[Any, Any]] = []

    def attach(self) -> "CodeCopy":
        inject_style(self.surface, "code-copy-styles", COPY_STYLES)
        self.decorate()
        self.surface.add_listener(self.surface.document, "click", self._on_click)
        return self

    def decorate(self) -> int:
        """Add buttons and labels to undecorated ``pre code`` blocks."""
        added = 0
        for index, code in enumerate(self.surface.select("pre code")):
            pre = closest(code, "pre")
            if pre.select_one(".code-copy-button") is not None:
                continue
            if not has_class(pre.parent, "code-block-wrapper"):
                pre.wrap(self.surface.create_element("div", {"class": ["code-block-wrapper"]}))
            set_style(pre, "position", "relative")
            pre.append(self.surface.parse_fragment(BUTTON_HTML.format(index=index)))
            language = detect_language(code)
            if language:
                pre.append(self.surface.create_element(
                    "div", {"class": ["code-language-label"]}, text=language_display_name(language)
                ))
            added += 1
        logger.debug("Decorated %d code blocks", added)
        return added

    def _on_click(self, event: Event) -> None:
        button = closest(event.target, ".code-copy-button")
        if button is None:
            return
        event.prevent_default()
        self.surface.spawn(self.handle_click(button))

    async def handle_click(self, button: Any) -> bool:
        pre = closest(button, "pre")
        code = pre.select_one("code") if pre is not None else None
        if code is None:
            return False
        try:
            await self.copy_to_clipboard(clean_code_text(code))
        except Exception as exc:
            logger.error("Failed to copy code: %s", exc)
            self.show_error(button)
            return False
        self.show_success(button)
        self._track_copy()
        return True

    async def copy_to_clipboard(self, text: str) -> None:
        clipboard = self.surface.clipboard
        if clipboard is not None and self.surface.secure_context:
            await clipboard.write_text(text)
            return
        if not self.surface.exec_copy(text):
            raise ClipboardError("Copy command failed")

    def _track_copy(self) -> None:
        analytics = self.surface.analytics
        if analytics is None:
            return
        try:
            analytics("code_copy", {"event_category": "engagement", "event_label": "code_block"})
        except Exception:
            logger.warning("Analytics hook failed", exc_info=True)

    def status(self, button: Any) -> CopyStatus:
        return CopyStatus(button.get("data-copy-status", CopyStatus.IDLE.value))

    def show_success(self, button: Any) -> None:
        set_style(button.select_one(".copy-icon"), "display", "none")
        set_style(button.select_one(".check-icon"), "display", "block")
        self._set_label(button, SUCCESS_TEXT)
        remove_class(button, "copy-error")
        add_class(button, "copy-success")
        self._enter(button, CopyStatus.SUCCESS)

    def show_error(self, button: Any) -> None:
        self._set_label(button, ERROR_TEXT)
        remove_class(button, "copy-success")
        add_class(button, "copy-error")
        self._enter(button, CopyStatus.ERROR)

    def reset(self, button: Any) -> None:
        self._pop_timer(button)
        set_style(button.select_one(".copy-icon"), "display", "block")
        set_style(button.select_one(".check-icon"), "display", "none")
        self._set_label(button, IDLE_TEXT)
        remove_class(button, "copy-success")
        remove_class(button, "copy-error")
        button.attrs.pop("data-copy-status", None)

    def _enter(self, button: Any, status: CopyStatus) -> None:
        # A pending revert is restarted, never stacked.
        pending = self._pop_timer(button)
        if pending is not None:
            pending.cancel()
        button["data-copy-status"] = status.value
        handle = self.surface.scheduler.call_later(self.reset_delay, self.reset, button)
        self._reset_timers.append((button, handle))

    def _pop_timer(self, button: Any) -> Any:
        for i, (owner, handle) in enumerate(self._reset_timers):
            if owner is button:
                del self._reset_timers[i]
                return handle
        return None

    @staticmethod
    def _set_label(button: Any, text: str) -> None:
        label = button.select_one(".copy-text")
        if label is not None:
            label.string = text
