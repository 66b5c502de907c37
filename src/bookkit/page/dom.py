from __future__ import annotations
from typing import Any, Dict, List
import soupsieve
from bs4 import Tag

def classes(tag: Tag) -> List[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return list(value)

def has_class(tag: Tag | None, name: str) -> bool:
    return tag is not None and name in classes(tag)

def add_class(tag: Tag | None, name: str) -> None:
    if tag is None:
        return
    current = classes(tag)
    if name not in current:
        tag["class"] = current + [name]

def remove_class(tag: Tag | None, name: str) -> None:
    if tag is None:
        return
    current = [c for c in classes(tag) if c != name]
    if current:
        tag["class"] = current
    elif tag.has_attr("class"):
        del tag["class"]

def get_style(tag: Tag) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for decl in (tag.get("style") or "").split(";"):
        prop, sep, value = decl.partition(":")
        if sep and prop.strip():
            out[prop.strip()] = value.strip()
    return out

def set_style(tag: Tag | None, prop: str, value: str) -> None:
    """Set one inline style property; an empty value removes it."""
    if tag is None:
        return
    style = get_style(tag)
    if value:
        style[prop] = value
    else:
        style.pop(prop, None)
    if style:
        tag["style"] = "; ".join(f"{k}: {v}" for k, v in style.items())
    elif tag.has_attr("style"):
        del tag["style"]

def closest(node: Any, selector: str) -> Tag | None:
    if not isinstance(node, Tag):
        return None
    return soupsieve.closest(selector, node)

def contains(ancestor: Tag | None, node: Any) -> bool:
    if ancestor is None or node is None:
        return False
    if node is ancestor:
        return True
    return any(p is ancestor for p in node.parents)

def inject_style(surface: Any, style_id: str, css: str) -> Tag:
    """Add a <style> block to the head once per document."""
    existing = surface.by_id(style_id)
    if existing is not None:
        return existing
    style = surface.create_element("style", {"id": style_id}, text=css)
    (surface.head or surface.document).append(style)
    return style
