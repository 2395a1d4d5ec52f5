"""HTML document tree: Document, Element, Text, Comment, and Doctype nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass
class Attribute:
    name: str
    value: str


@dataclass
class Text:
    data: str


@dataclass
class Comment:
    data: str


@dataclass
class Doctype:
    data: str


@dataclass(eq=False)
class Element:
    """An element with ordered attributes and children."""

    tag: str
    attrs: list[Attribute] = field(default_factory=list)
    children: list[HtmlNode] = field(default_factory=list)

    def get(self, name: str) -> str | None:
        for attr in self.attrs:
            if attr.name == name:
                return attr.value
        return None

    def set(self, name: str, value: str) -> None:
        """Update *name* in place, or append it when absent."""
        for attr in self.attrs:
            if attr.name == name:
                attr.value = value
                return
        self.attrs.append(Attribute(name, value))

    def remove(self, *names: str) -> None:
        self.attrs = [attr for attr in self.attrs if attr.name not in names]

    @property
    def classes(self) -> list[str]:
        value = self.get("class")
        return value.split() if value else []

    def iter_elements(self) -> Iterator[Element]:
        """This element and every descendant element, in document order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()


@dataclass(eq=False)
class Document:
    children: list[HtmlNode] = field(default_factory=list)

    def iter_elements(self) -> Iterator[Element]:
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter_elements()

    def find(self, tag: str) -> Element | None:
        """First element named *tag*, depth first."""
        for element in self.iter_elements():
            if element.tag == tag:
                return element
        return None


HtmlNode = Union[Element, Text, Comment, Doctype]
