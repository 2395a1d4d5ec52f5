from mailcss.inline.class_names import sanitize_class_name
from mailcss.inline.compose import combine_styles, make_inline_styles_for
from mailcss.inline.element import add_inlined_styles_to_element

__all__ = [
    "add_inlined_styles_to_element",
    "combine_styles",
    "make_inline_styles_for",
    "sanitize_class_name",
]
