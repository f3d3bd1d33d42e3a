"""Shared document fixtures for renderer tests."""

import pytest
from builders import paragraph_item, single_section
from docrender.models import (
    Document,
    ImageResource,
    ListItemBlock,
    OrderedListBlock,
    ParagraphBlock,
    UnorderedListBlock,
)


@pytest.fixture
def nested_list_document() -> Document:
    """Unordered list whose first item holds text and a nested ordered list."""
    nested = OrderedListBlock(
        id="ol1",
        children=[
            paragraph_item("li1.1", "Inner item A"),
            paragraph_item("li1.2", "Inner item B"),
        ],
    )
    outer = UnorderedListBlock(
        id="ul1",
        children=[
            ListItemBlock(
                id="li1",
                children=[ParagraphBlock(id="p1", text="Outer item 1"), nested],
            ),
            paragraph_item("li2", "Outer item 2"),
        ],
    )
    return single_section(outer)


@pytest.fixture
def image_resource() -> ImageResource:
    """A resolved image resource."""
    return ImageResource(
        id="img1",
        original_url="http://example.com/image.png",
        resolved_url="/images/image.png",
        alt_text="An example image",
    )
