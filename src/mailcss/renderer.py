"""Render HTML into email-safe HTML with every applicable style inlined.

Pipeline for one render:
    1. Parse the HTML, drop comments and event-handler attributes, and collect
       the classes in use.
    2. Parse the stylesheet (optionally produced by a :class:`CssGenerator`)
       and run the transform pipeline: variables, calc(), declarations.
    3. Index rules per class and by global selector.
    4. Inline styles element by element.
    5. Inject the non-inlinable rules into ``<head>`` and normalize the DOCTYPE.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field

from mailcss.config import RenderConfig
from mailcss.errors import MissingHeadError
from mailcss.generator import CssGenerator, sanitize_custom_css
from mailcss.html.parser import parse_html
from mailcss.html.serializer import serialize
from mailcss.html.tree import Comment, Doctype, Document, Element, HtmlNode, Text
from mailcss.html.walk import walk
from mailcss.inline.element import add_inlined_styles_to_element
from mailcss.model.diagnostic import Diagnostic, Diagnostics
from mailcss.rules.custom_properties import get_custom_properties
from mailcss.rules.extract import extract_global_rules, extract_rules_per_class
from mailcss.stylesheet.parser import parse_stylesheet
from mailcss.transforms import sanitize_non_inlinable_rules, sanitize_stylesheet

logger = logging.getLogger(__name__)

_DOCTYPE_RE = re.compile(r"^\s*<!DOCTYPE\s+(.*?)\s*>\s*$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class RenderResult:
    """Rendered HTML plus everything noticed along the way."""

    html: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    variables_converged: bool = True

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.is_warning]


def _doctype_body(doctype: str) -> str:
    match = _DOCTYPE_RE.match(doctype)
    return match.group(1) if match else doctype


def _prepare(document: Document, config: RenderConfig) -> list[str]:
    """Strip comments and event handlers; return the classes in use, in order."""
    classes: list[str] = []

    def visit(node: HtmlNode) -> HtmlNode | None:
        if isinstance(node, Comment):
            return None
        if isinstance(node, Element):
            node.remove(*config.stripped_attributes)
            for name in node.classes:
                if name not in classes:
                    classes.append(name)
        return node

    walk(document, visit)
    return classes


def _root_element(document: Document) -> Element | None:
    for child in document.children:
        if isinstance(child, Element) and child.tag == "html":
            return child
    return None


def _normalize_doctype(document: Document, doctype: str) -> None:
    body = _doctype_body(doctype)
    for index, child in enumerate(document.children):
        if isinstance(child, Doctype):
            document.children[index] = Doctype(body)
            return
    if _root_element(document) is not None:
        document.children.insert(0, Doctype(body))


def _render(
    document: Document, classes: list[str], stylesheet_css: str, config: RenderConfig
) -> RenderResult:
    diagnostics = Diagnostics()

    stylesheet = parse_stylesheet(stylesheet_css)
    logger.debug("Parsed stylesheet with %d top-level nodes", len(stylesheet.children))
    variables = sanitize_stylesheet(stylesheet, diagnostics, config)

    class_rules = extract_rules_per_class(stylesheet, classes)
    global_rules = extract_global_rules(stylesheet)
    custom_properties = get_custom_properties(stylesheet)
    non_inline_sheet = sanitize_non_inlinable_rules(class_rules.non_inlinable.values())

    root = _root_element(document)
    unknown_classes: list[str] = []

    def inline(node: HtmlNode) -> HtmlNode:
        if isinstance(node, Element):
            add_inlined_styles_to_element(
                node,
                class_rules,
                global_rules,
                custom_properties,
                unknown_classes,
                is_document_root=node is root,
            )
        return node

    walk(document, inline)

    if unknown_classes:
        names = " ".join(unknown_classes)
        diagnostics.warn(
            "unknown-class",
            f"You are using the following classes that were not recognized: {names}.",
            subject=names,
        )

    if class_rules.non_inlinable:
        head = document.find("head")
        if head is None:
            raise MissingHeadError(class_rules.non_inlinable.keys())
        style = Element("style", children=[Text(non_inline_sheet.to_css())])
        head.children.insert(0, style)

    _normalize_doctype(document, config.doctype)

    return RenderResult(
        html=serialize(document),
        diagnostics=diagnostics.items,
        variables_converged=variables.converged,
    )


class Renderer:
    """Inline a stylesheet into HTML documents.

    With a *generator*, the stylesheet for each document is produced from the
    classes the document uses (plus *custom_css*) and any stylesheet passed to
    :meth:`render` is appended to it.  Generator calls are serialized, so one
    renderer can be shared between threads.
    """

    def __init__(
        self,
        generator: CssGenerator | None = None,
        config: RenderConfig | None = None,
        custom_css: str = "",
    ) -> None:
        self.generator = generator
        self.config = config or RenderConfig()
        self.custom_css = sanitize_custom_css(custom_css) if custom_css else ""
        self._lock = threading.Lock()

    def _generate(self, classes: list[str]) -> str:
        if self.generator is None:
            return ""
        with self._lock:
            return self.generator.generate(classes, self.custom_css)

    def render(self, document_html: str, stylesheet_css: str = "") -> RenderResult:
        """Render *document_html*; see :func:`render` for errors raised."""
        document = parse_html(document_html)
        classes = _prepare(document, self.config)
        logger.debug("Collected %d classes", len(classes))

        generated = self._generate(classes)
        css = "\n".join(part for part in (generated, stylesheet_css) if part)
        return _render(document, classes, css, self.config)


def render(
    document_html: str,
    stylesheet_css: str,
    config: RenderConfig | None = None,
) -> RenderResult:
    """Inline *stylesheet_css* into *document_html*.

    Raises:
        ParseError: If the stylesheet or the HTML cannot be parsed.
        MalformedColorError: If an ``oklch()`` or ``rgb()`` cannot be read.
        MissingHeadError: If rules must stay in ``<style>`` but there is no ``<head>``.
    """
    return Renderer(config=config).render(document_html, stylesheet_css)
