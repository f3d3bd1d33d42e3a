"""Canonical document to slide descriptors for a slide-deck generator."""

from __future__ import annotations

import json
from dataclasses import replace
from functools import reduce
from typing import Any, Optional, Union

from ..models.config import SlideOptions
from ..models.document import (
    LIST_TYPES,
    TEXT_TYPES,
    BlockType,
    CodeBlock,
    Document,
    HeaderBlock,
    ImageReferenceBlock,
    ListBlock,
    ListItemBlock,
    QuoteBlock,
    Section,
    TableBlock,
)
from ..models.slides import (
    CodeElement,
    ImageElement,
    ListElement,
    ListType,
    ParagraphElement,
    QuoteElement,
    SlideDescriptor,
    SlideElement,
    TableElement,
    TitleElement,
)
from .base import BaseRenderer, BlockVisitor

UNHANDLED_ITEM = "[List item with complex or unhandled content]"

Slides = tuple[SlideDescriptor, ...]


class _SlideVisitor(BlockVisitor[SlideElement]):
    def __init__(self, document: Document, options: SlideOptions):
        super().__init__(document)
        self.options = options

    def visit_paragraph(self, block: Any, depth: int) -> ParagraphElement:
        return ParagraphElement(text=block.text)

    def visit_header(self, block: HeaderBlock, depth: int) -> TitleElement:
        return TitleElement(text=block.text, level=block.level)

    def visit_list(self, block: ListBlock, depth: int) -> ListElement:
        list_type = ListType.ORDERED if block.type == BlockType.ORDERED_LIST else ListType.UNORDERED
        items: list[Union[str, ListElement]] = []
        for item in block.children:
            items.extend(self._list_item_entries(item, depth))
        return ListElement(list_type=list_type, items=tuple(items))

    def _list_item_entries(self, item: ListItemBlock, depth: int) -> list[Union[str, ListElement]]:
        if not item.children:
            return [""]

        texts = []
        nested: Optional[ListElement] = None
        for child in item.children:
            if child.type in LIST_TYPES:
                # Only the first nested list of an item is kept.
                if nested is None:
                    nested = self.visit_list(child, depth + 1)
            elif child.type in TEXT_TYPES and child.text.strip():
                texts.append(child.text.strip())

        text = " ".join(texts)

        if nested is not None:
            if text and self.options.nested_list_text == "preserve":
                return [text, nested]
            return [nested]

        if text:
            return [text]

        first = item.children[0]
        if isinstance(first, ImageReferenceBlock):
            alt = first.alt_text or (f"Image: {first.resource_id}" if first.resource_id else "Image")
            return [f"[{alt}]"]
        return [UNHANDLED_ITEM]

    def visit_image(self, block: ImageReferenceBlock, depth: int) -> ImageElement:
        src, alt, _ = self.resolve_image(block)
        return ImageElement(src=src, alt=alt, caption=block.caption or "")

    def visit_table(self, block: TableBlock, depth: int) -> TableElement:
        headers, rows = block.flattened()
        return TableElement(headers=tuple(headers), rows=tuple(tuple(row) for row in rows))

    def visit_quote(self, block: QuoteBlock, depth: int) -> QuoteElement:
        return QuoteElement(text=block.text, attribution=block.attribution or "")

    def visit_code(self, block: CodeBlock, depth: int) -> CodeElement:
        return CodeElement(text=block.text, language=block.language or "")

    def fold_section(self, slides: Slides, section: Section) -> Slides:
        """Apply one section to the slides built so far."""
        current = slides[-1] if slides else None

        if section.header:
            if current is not None and not current.elements and not current.title:
                slides = slides[:-1] + (replace(current, title=section.header),)
            else:
                slides = slides + (SlideDescriptor(title=section.header),)
        elif current is None:
            slides = (SlideDescriptor(title=""),)

        elements = tuple(self.visit_blocks(section.blocks))
        if elements:
            last = slides[-1]
            slides = slides[:-1] + (replace(last, elements=last.elements + elements),)
        return slides


class SlideRenderer(BaseRenderer[list[SlideDescriptor]]):
    """
    Transforms a canonical Document into an ordered list of slides.

    A document title opens a title slide. Each section with a header starts
    a new slide, unless the current slide is still empty and untitled, in
    which case it takes the header. Sections without a header append to the
    current slide.

    Example:
        slides = SlideRenderer().render(document)
        payload = [slide.to_dict() for slide in slides]
    """

    @classmethod
    def default_options(cls) -> SlideOptions:
        return SlideOptions()

    def render(self, document: Optional[Document]) -> list[SlideDescriptor]:
        """
        Transform a document into slide descriptors.

        Args:
            document: Canonical document, or None

        Returns:
            List of SlideDescriptor; empty when there is no title and no section
        """
        if document is None:
            return []

        initial: Slides = (SlideDescriptor(title=document.title),) if document.title else ()
        if not initial and not document.sections:
            return []

        visitor = _SlideVisitor(document, self.options)
        slides = reduce(visitor.fold_section, document.sections, initial)

        self.logger.debug(f"Built {len(slides)} slides from {len(document.sections)} sections")

        return list(slides)

    def get_file_extension(self) -> str:
        """Get slide descriptor extension.

        Returns:
            '.json'
        """
        return ".json"

    def serialize(self, rendered: list[SlideDescriptor]) -> str:
        return json.dumps([slide.to_dict() for slide in rendered], indent=2, ensure_ascii=False)


def render_slides(
    document: Optional[Document], options: Optional[SlideOptions] = None
) -> list[SlideDescriptor]:
    """Transform a document into slide descriptors with a one-off renderer."""
    return SlideRenderer(options).render(document)
