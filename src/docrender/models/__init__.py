"""Docrender document, slide and configuration models."""

from .config import HtmlOptions, MarkdownOptions, RenderConfig, SlideOptions
from .document import (
    Block,
    BlockType,
    CodeBlock,
    CustomBlock,
    Document,
    DocumentMetadata,
    HeaderBlock,
    HorizontalRuleBlock,
    ImageReferenceBlock,
    ImageResource,
    ListItemBlock,
    OrderedListBlock,
    ParagraphBlock,
    QuoteBlock,
    Section,
    TableBlock,
    TableCell,
    TableRow,
    TableRowGroup,
    TextContentBlock,
    UnorderedListBlock,
)
from .slides import (
    CodeElement,
    ImageElement,
    ListElement,
    ListType,
    ParagraphElement,
    QuoteElement,
    SlideDescriptor,
    SlideElement,
    SlideElementType,
    TableElement,
    TitleElement,
)

__all__ = [
    # Document
    "Block",
    "BlockType",
    "CodeBlock",
    "CustomBlock",
    "Document",
    "DocumentMetadata",
    "HeaderBlock",
    "HorizontalRuleBlock",
    "ImageReferenceBlock",
    "ImageResource",
    "ListItemBlock",
    "OrderedListBlock",
    "ParagraphBlock",
    "QuoteBlock",
    "Section",
    "TableBlock",
    "TableCell",
    "TableRow",
    "TableRowGroup",
    "TextContentBlock",
    "UnorderedListBlock",
    # Slides
    "CodeElement",
    "ImageElement",
    "ListElement",
    "ListType",
    "ParagraphElement",
    "QuoteElement",
    "SlideDescriptor",
    "SlideElement",
    "SlideElementType",
    "TableElement",
    "TitleElement",
    # Config
    "HtmlOptions",
    "MarkdownOptions",
    "RenderConfig",
    "SlideOptions",
]
