"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures.common import make_items, with_sibling

    def test_something():
        items = make_items(5)
"""

from .common import (
    DEMO_ITEMS,
    FIVE_ITEMS,
    SEVEN_ITEMS,
    flip_first_byte,
    foreign_digest,
    make_items,
    with_sibling,
)

__all__ = [
    "DEMO_ITEMS",
    "FIVE_ITEMS",
    "SEVEN_ITEMS",
    "flip_first_byte",
    "foreign_digest",
    "make_items",
    "with_sibling",
]
