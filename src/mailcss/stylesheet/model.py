"""Stylesheet model: Declaration, StyleRule, AtRule, and Stylesheet nodes.

The node set is closed: every child of a container is one of
:class:`Declaration`, :class:`StyleRule` or :class:`AtRule`.  Nodes keep a
reference to their parent so rules can be classified by where they sit
(inside ``@media``, inside ``@layer``, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

CONDITIONAL_AT_RULES = frozenset({"media", "supports", "container", "document"})


class AtRuleKind(Enum):
    """How an at-rule affects the rules nested inside it."""

    CONDITIONAL = "conditional"  # @media, @supports, @container, @document
    LAYER = "layer"
    PROPERTY = "property"
    OTHER = "other"


@dataclass(eq=False)
class Declaration:
    """A single ``prop: value [!important]`` declaration."""

    prop: str
    value: str
    important: bool = False
    parent: Container | None = field(default=None, repr=False)

    @property
    def is_custom_property(self) -> bool:
        return self.prop.startswith("--")

    def clone(self, **changes: object) -> Declaration:
        values = {"prop": self.prop, "value": self.value, "important": self.important}
        values.update(changes)
        return Declaration(**values)  # type: ignore[arg-type]

    def to_css(self) -> str:
        important = " !important" if self.important else ""
        return f"{self.prop}: {self.value}{important}"


class _ContainerMixin:
    """Child management and tree walking shared by rules and the stylesheet."""

    children: list[Node]

    def _adopt(self) -> None:
        for child in self.children:
            child.parent = self  # type: ignore[assignment]

    def append(self, node: Node) -> Node:
        node.parent = self  # type: ignore[assignment]
        self.children.append(node)
        return node

    def remove(self, node: Node) -> None:
        self.children = [child for child in self.children if child is not node]
        node.parent = None

    def replace_children(self, nodes: list[Node]) -> None:
        self.children = list(nodes)
        self._adopt()

    @property
    def declarations(self) -> list[Declaration]:
        """Direct child declarations, in order."""
        return [c for c in self.children if isinstance(c, Declaration)]

    def walk(self) -> Iterator[Node]:
        """Yield every descendant node in document order (pre-order)."""
        for child in list(self.children):
            yield child
            if isinstance(child, (StyleRule, AtRule)) and child.children is not None:
                yield from child.walk()

    def walk_rules(self) -> Iterator[StyleRule]:
        for node in self.walk():
            if isinstance(node, StyleRule):
                yield node

    def walk_declarations(self) -> Iterator[Declaration]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node

    def walk_at_rules(self, name: str | None = None) -> Iterator[AtRule]:
        for node in self.walk():
            if isinstance(node, AtRule) and (name is None or node.name == name):
                yield node

    def walk_containers(self) -> Iterator[Container]:
        """Yield this container and every descendant that holds children."""
        yield self  # type: ignore[misc]
        for node in self.walk():
            if isinstance(node, StyleRule):
                yield node
            elif isinstance(node, AtRule) and node.children is not None:
                yield node


def _block_to_css(children: list[Node]) -> str:
    parts = []
    for child in children:
        if isinstance(child, Declaration):
            parts.append(child.to_css() + ";")
        else:
            parts.append(child.to_css())
    if not parts:
        return "{}"
    return "{ " + " ".join(parts) + " }"


@dataclass(eq=False)
class StyleRule(_ContainerMixin):
    """A qualified rule: a selector list followed by a block."""

    selector: str
    children: list[Node] = field(default_factory=list)
    parent: Container | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._adopt()

    def clone(self, selector: str | None = None) -> StyleRule:
        """Deep copy detached from any parent."""
        return StyleRule(
            selector=self.selector if selector is None else selector,
            children=[_clone(child) for child in self.children],
        )

    def to_css(self) -> str:
        return f"{self.selector} {_block_to_css(self.children)}"


@dataclass(eq=False)
class AtRule(_ContainerMixin):
    """An at-rule.  ``children`` is ``None`` for statement at-rules (``@import x;``)."""

    name: str
    params: str = ""
    children: list[Node] | None = None
    parent: Container | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.children is not None:
            self._adopt()

    @property
    def kind(self) -> AtRuleKind:
        if self.name in CONDITIONAL_AT_RULES:
            return AtRuleKind.CONDITIONAL
        if self.name == "layer":
            return AtRuleKind.LAYER
        if self.name == "property":
            return AtRuleKind.PROPERTY
        return AtRuleKind.OTHER

    def walk(self) -> Iterator[Node]:
        if self.children is None:
            return iter(())
        return super().walk()

    def clone(self) -> AtRule:
        children = None
        if self.children is not None:
            children = [_clone(child) for child in self.children]
        return AtRule(name=self.name, params=self.params, children=children)

    def to_css(self) -> str:
        prelude = f"@{self.name} {self.params}" if self.params else f"@{self.name}"
        if self.children is None:
            return prelude + ";"
        return f"{prelude} {_block_to_css(self.children)}"


@dataclass(eq=False)
class Stylesheet(_ContainerMixin):
    """A parsed stylesheet: the root container of rules and at-rules."""

    children: list[Node] = field(default_factory=list)

    parent = None

    def __post_init__(self) -> None:
        self._adopt()

    def to_css(self) -> str:
        return "\n".join(child.to_css() for child in self.children)


Node = Union[Declaration, StyleRule, AtRule]
Container = Union[StyleRule, AtRule, Stylesheet]


def _clone(node: Node) -> Node:
    return node.clone()


def iter_ancestors(node: Node) -> Iterator[Container]:
    """Yield the parent chain of *node*, nearest first, ending at the root."""
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent
