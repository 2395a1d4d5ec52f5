"""Tests for DOM-safe class names."""

import pytest

from mailcss.inline import sanitize_class_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("p-2", "p-2"),
        ("sm:p-2", "sm_p-2"),
        ("hover:underline", "hover_underline"),
        ("w-1/2", "w-1_2"),
        ("w-[50%]", "w-50pc"),
        ("!mt-0", "imprtntmt-0"),
        ("min-height-[calc(25px+100%-20%*2/4)]", "min-height-calc25pxplus100pc-20pc_2_4"),
        ("max-[600px]:hidden", "max-600px_hidden"),
        ("data-[state=open]:block", "data-stateeqopen_block"),
        ("group-[>p]:x", "group-gtp_x"),
    ],
)
def test_sanitize_class_name(name, expected):
    assert sanitize_class_name(name) == expected
