"""Push matched rules into one element's ``style`` attribute."""

from __future__ import annotations

from mailcss.html.tree import Element
from mailcss.inline.class_names import sanitize_class_name
from mailcss.inline.compose import combine_styles, make_inline_styles_for
from mailcss.rules.custom_properties import CustomProperty
from mailcss.rules.extract import ClassRules, GlobalRules, get_matching_global_rules_for_element
from mailcss.stylesheet.model import StyleRule

# Elements that never render; universal and tag rules are not inlined onto them.
NON_RENDERED_ELEMENTS = frozenset({"head", "title", "meta", "style", "script", "link"})


def add_inlined_styles_to_element(
    element: Element,
    class_rules: ClassRules,
    global_rules: GlobalRules,
    custom_properties: dict[str, CustomProperty],
    unknown_classes: list[str],
    is_document_root: bool = False,
) -> Element:
    """Inline every applicable rule into *element*, lowest precedence first.

    Order: universal rules, rules for the element's tag, ``:root`` rules (only
    on the document's root ``<html>``), class rules in class-attribute order,
    then the element's own ``style``.  Universal and tag rules skip
    :data:`NON_RENDERED_ELEMENTS`.  Classes whose rules stay in the
    ``<style>`` block are renamed to their DOM-safe form; classes with no rule
    at all are kept and appended to *unknown_classes*.
    """
    global_matches: list[StyleRule] = []
    if element.tag not in NON_RENDERED_ELEMENTS:
        global_matches = get_matching_global_rules_for_element(
            global_rules.universal + global_rules.for_tag(element.tag), element
        )
    root_rules = global_rules.root if is_document_root else []

    classes = element.classes
    matched: list[StyleRule] = []
    residual: list[str] = []
    for name in classes:
        rule = class_rules.inlinable.get(name)
        if rule is not None:
            matched.append(rule)
        else:
            residual.append(name)

    styles = combine_styles(
        make_inline_styles_for(global_matches, custom_properties),
        make_inline_styles_for(root_rules, custom_properties),
        make_inline_styles_for(matched, custom_properties),
        element.get("style"),
    )
    if styles:
        element.set("style", styles)

    if element.get("class") is None:
        return element

    if not residual:
        element.remove("class")
        return element

    kept = []
    for name in residual:
        if name in class_rules.non_inlinable:
            kept.append(sanitize_class_name(name))
        else:
            if name not in unknown_classes:
                unknown_classes.append(name)
            kept.append(name)
    element.set("class", " ".join(kept))
    return element
