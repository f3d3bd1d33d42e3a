"""Slide descriptors handed to a downstream slide-deck generator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class SlideElementType(str, Enum):
    """Kinds of element that can appear on a slide."""

    PARAGRAPH = "PARAGRAPH"
    TITLE = "TITLE"
    LIST = "LIST"
    IMAGE = "IMAGE"
    TABLE = "TABLE"
    QUOTE = "QUOTE"
    CODE = "CODE"


class ListType(str, Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"


@dataclass(frozen=True)
class ParagraphElement:
    text: str
    type: SlideElementType = field(default=SlideElementType.PARAGRAPH, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True)
class TitleElement:
    """A sub-heading inside a slide, distinct from the slide's own title."""

    text: str
    level: int = 1
    type: SlideElementType = field(default=SlideElementType.TITLE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text, "level": self.level}


@dataclass(frozen=True)
class ListElement:
    """
    A bulleted or numbered list.

    Each item is either a plain string or a nested ``ListElement``. A nested
    list directly follows the text entry of the item that owns it.
    """

    list_type: ListType
    items: tuple[Union[str, "ListElement"], ...] = ()
    type: SlideElementType = field(default=SlideElementType.LIST, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "listType": self.list_type.value,
            "items": [item if isinstance(item, str) else item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class ImageElement:
    src: str = ""
    alt: str = ""
    caption: str = ""
    type: SlideElementType = field(default=SlideElementType.IMAGE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "src": self.src, "alt": self.alt, "caption": self.caption}


@dataclass(frozen=True)
class TableElement:
    headers: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    type: SlideElementType = field(default=SlideElementType.TABLE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
        }


@dataclass(frozen=True)
class QuoteElement:
    text: str
    attribution: str = ""
    type: SlideElementType = field(default=SlideElementType.QUOTE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text, "attribution": self.attribution}


@dataclass(frozen=True)
class CodeElement:
    text: str
    language: str = ""
    type: SlideElementType = field(default=SlideElementType.CODE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text, "language": self.language}


SlideElement = Union[
    ParagraphElement,
    TitleElement,
    ListElement,
    ImageElement,
    TableElement,
    QuoteElement,
    CodeElement,
]


@dataclass(frozen=True)
class SlideDescriptor:
    """
    One slide: a title plus a flat, ordered list of elements.

    Example:
        slide = SlideDescriptor(title="Intro", elements=(ParagraphElement("Hello"),))
        slide.to_dict()
        # {"type": "SLIDE", "title": "Intro", "elements": [{"type": "PARAGRAPH", "text": "Hello"}]}
    """

    title: str = ""
    elements: tuple[SlideElement, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain-dict form consumed by slide backends."""
        return {
            "type": "SLIDE",
            "title": self.title,
            "elements": [element.to_dict() for element in self.elements],
        }
