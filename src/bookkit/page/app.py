from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Sequence
from .code_copy import CodeCopy
from .search import SearchBox
from .sidebar import MARKUPS, Sidebar, SidebarMarkup, detect_markup
from .surface import SoupSurface, UISurface

logger = logging.getLogger(__name__)

@dataclass
class PageComponents:
    sidebar: Optional[Sidebar]
    code_copy: CodeCopy
    search: SearchBox

def init_page(surface: UISurface, markups: Sequence[SidebarMarkup] = MARKUPS) -> PageComponents:
    """Construct and attach every page behavior for ``surface``."""
    markup = detect_markup(surface, markups)
    sidebar = Sidebar(surface, markup).attach() if markup is not None else None
    if sidebar is None:
        logger.debug("No sidebar markup on page")
    return PageComponents(
        sidebar=sidebar,
        code_copy=CodeCopy(surface).attach(),
        search=SearchBox(surface).attach(),
    )

def enhance_html(html: str) -> tuple[str, int]:
    """Pre-render copy buttons and language labels into static HTML."""
    surface = SoupSurface(html)
    added = CodeCopy(surface).decorate()
    return surface.to_html(), added
