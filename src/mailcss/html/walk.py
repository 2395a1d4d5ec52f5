"""Tree walking with replace/delete callbacks."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from mailcss.html.tree import Document, Element, HtmlNode

Callback = Callable[[HtmlNode], Optional[HtmlNode]]

_Root = TypeVar("_Root", Document, Element)


def walk(root: _Root, callback: Callback) -> _Root:
    """Visit every node under *root*, children before their parent.

    Each child list is rebuilt from the callback results: returning the node
    keeps it, returning another node replaces it, returning ``None`` deletes
    it (with its subtree).
    """
    children = []
    for child in root.children:
        if isinstance(child, Element):
            walk(child, callback)
        result = callback(child)
        if result is not None:
            children.append(result)
    root.children = children
    return root
