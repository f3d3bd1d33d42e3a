"""Pydantic models for the canonical document tree.

A ``Document`` is produced by an upstream extraction step and treated as
read-only by every renderer. Blocks form a closed discriminated union keyed
on ``type``, so a dict or JSON payload is routed to exactly one block model.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

MIN_HEADER_LEVEL = 1
MAX_HEADER_LEVEL = 6


class BlockType(str, Enum):
    """Tags for the content block variants."""

    PARAGRAPH = "PARAGRAPH"
    HEADER = "HEADER"
    UNORDERED_LIST = "UNORDERED_LIST"
    ORDERED_LIST = "ORDERED_LIST"
    LIST_ITEM = "LIST_ITEM"
    IMAGE_REFERENCE = "IMAGE_REFERENCE"
    TABLE = "TABLE"
    TEXT_CONTENT = "TEXT_CONTENT"
    QUOTE = "QUOTE"
    CODE_BLOCK = "CODE_BLOCK"
    HORIZONTAL_RULE = "HORIZONTAL_RULE"
    CUSTOM = "CUSTOM"


LIST_TYPES = (BlockType.UNORDERED_LIST, BlockType.ORDERED_LIST)
TEXT_TYPES = (BlockType.PARAGRAPH, BlockType.TEXT_CONTENT)


class _BlockBase(BaseModel):
    """Fields shared by every block variant."""

    id: str = Field(..., min_length=1, description="Identifier, unique within the document")

    model_config = {"extra": "forbid", "frozen": True}

    def iter_children(self) -> Iterator[Block]:
        """Yield the blocks owned directly by this block."""
        return iter(())


class ParagraphBlock(_BlockBase):
    type: Literal[BlockType.PARAGRAPH] = BlockType.PARAGRAPH
    text: str = ""


class TextContentBlock(_BlockBase):
    type: Literal[BlockType.TEXT_CONTENT] = BlockType.TEXT_CONTENT
    text: str = ""


class QuoteBlock(_BlockBase):
    type: Literal[BlockType.QUOTE] = BlockType.QUOTE
    text: str = ""
    attribution: Optional[str] = Field(None, description="Who or what the quote is credited to")


class HeaderBlock(_BlockBase):
    type: Literal[BlockType.HEADER] = BlockType.HEADER
    text: str = ""
    level: int = Field(MIN_HEADER_LEVEL, description="Heading level, clamped to 1-6")

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, value: Any) -> int:
        if value is None:
            return MIN_HEADER_LEVEL
        level = int(value)
        if level < MIN_HEADER_LEVEL:
            return MIN_HEADER_LEVEL
        return min(level, MAX_HEADER_LEVEL)


class ListItemBlock(_BlockBase):
    """A list entry; children may be text, nested lists or any other block."""

    type: Literal[BlockType.LIST_ITEM] = BlockType.LIST_ITEM
    children: list[Block] = Field(default_factory=list)

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class UnorderedListBlock(_BlockBase):
    type: Literal[BlockType.UNORDERED_LIST] = BlockType.UNORDERED_LIST
    children: list[ListItemBlock] = Field(default_factory=list)

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class OrderedListBlock(_BlockBase):
    type: Literal[BlockType.ORDERED_LIST] = BlockType.ORDERED_LIST
    children: list[ListItemBlock] = Field(default_factory=list)

    def iter_children(self) -> Iterator[Block]:
        return iter(self.children)


class ImageReferenceBlock(_BlockBase):
    """Points at an ``ImageResource`` by id, with block-local fallbacks."""

    type: Literal[BlockType.IMAGE_REFERENCE] = BlockType.IMAGE_REFERENCE
    resource_id: Optional[str] = Field(None, description="Id of the referenced ImageResource")
    caption: Optional[str] = None
    alt_text: Optional[str] = Field(None, description="Fallback alt text")
    src: Optional[str] = Field(None, description="Fallback source used when the resource is missing")


class TableCell(BaseModel):
    """One cell of a structural table; its content is a list of text blocks."""

    header: bool = False
    children: list[Block] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def text(self) -> str:
        parts = [getattr(child, "text", "").strip() for child in self.children if child.type in TEXT_TYPES]
        return " ".join(part for part in parts if part)


class TableRow(BaseModel):
    cells: list[TableCell] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def texts(self) -> list[str]:
        return [cell.text for cell in self.cells]


class TableRowGroup(BaseModel):
    kind: Literal["header", "body", "footer"] = "body"
    rows: list[TableRow] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


class TableBlock(_BlockBase):
    """Table in either flat (headers + rows) or structural (row groups) form.

    The structural form wins when ``row_groups`` is non-empty.
    """

    type: Literal[BlockType.TABLE] = BlockType.TABLE
    headers: list[str] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)
    row_groups: list[TableRowGroup] = Field(default_factory=list)
    caption: Optional[str] = None

    @property
    def is_structural(self) -> bool:
        return bool(self.row_groups)

    def iter_children(self) -> Iterator[Block]:
        for group in self.row_groups:
            for row in group.rows:
                for cell in row.cells:
                    yield from cell.children

    def flattened(self) -> tuple[list[str], list[list[str]]]:
        """Return ``(headers, rows)`` regardless of representation.

        For the structural form the headers are the first row of the first
        header group; every other row becomes a data row.
        """
        if not self.is_structural:
            return list(self.headers), [list(row) for row in self.rows]

        headers: list[str] = []
        rows: list[list[str]] = []
        for group in self.row_groups:
            for index, row in enumerate(group.rows):
                if group.kind == "header" and index == 0 and not headers:
                    headers = row.texts
                else:
                    rows.append(row.texts)
        return headers, rows


class CodeBlock(_BlockBase):
    type: Literal[BlockType.CODE_BLOCK] = BlockType.CODE_BLOCK
    text: str = ""
    language: Optional[str] = None


class HorizontalRuleBlock(_BlockBase):
    type: Literal[BlockType.HORIZONTAL_RULE] = BlockType.HORIZONTAL_RULE


class CustomBlock(_BlockBase):
    """Opaque key-value payload; renderers skip it."""

    type: Literal[BlockType.CUSTOM] = BlockType.CUSTOM
    properties: dict[str, Any] = Field(default_factory=dict)


Block = Annotated[
    Union[
        ParagraphBlock,
        TextContentBlock,
        QuoteBlock,
        HeaderBlock,
        UnorderedListBlock,
        OrderedListBlock,
        ListItemBlock,
        ImageReferenceBlock,
        TableBlock,
        CodeBlock,
        HorizontalRuleBlock,
        CustomBlock,
    ],
    Field(discriminator="type"),
]

ListBlock = Union[UnorderedListBlock, OrderedListBlock]


class ImageResource(BaseModel):
    """An image collected during extraction."""

    id: str = Field(..., min_length=1, description="Identifier, unique within the document")
    original_url: str = Field("", description="URL the image was scraped from")
    resolved_url: Optional[str] = Field(
        None,
        description="Local path, data URI or remote URL after acquisition",
    )
    alt_text: Optional[str] = None
    format: Optional[str] = Field(None, description="Image format, e.g. 'png'")  # noqa: A003
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def display_url(self) -> str:
        return self.resolved_url or self.original_url


class DocumentMetadata(BaseModel):
    title: Optional[str] = None
    source_url: Optional[str] = None
    author: Optional[str] = None
    date_scraped: Optional[str] = Field(None, description="ISO timestamp of the scrape")
    publication_date: Optional[str] = None
    additional_properties: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "forbid", "frozen": True}


class Section(BaseModel):
    id: str = Field(..., min_length=1, description="Identifier, unique within the document")
    header: Optional[str] = None
    blocks: list[Block] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}


class Document(BaseModel):
    """
    Root of the canonical tree.

    Renderers only read a Document; callers sharing one across threads must
    not mutate it while a render is in progress.

    Example:
        document = Document(
            metadata=DocumentMetadata(title="Guide"),
            sections=[
                Section(id="s1", header="Intro", blocks=[ParagraphBlock(id="b1", text="Hello")]),
            ],
        )
    """

    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    sections: list[Section] = Field(default_factory=list)
    image_resources: list[ImageResource] = Field(default_factory=list)
    schema_version: str = Field("1.0.0", description="Canonical document schema version")

    model_config = {"extra": "forbid", "frozen": True}

    _images: dict[str, ImageResource] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._images = {image.id: image for image in self.image_resources}

    @model_validator(mode="after")
    def _check_identifiers(self) -> Document:
        _ensure_unique("section", (section.id for section in self.sections))
        _ensure_unique("image resource", (image.id for image in self.image_resources))
        _ensure_unique("block", (block.id for block in self.iter_blocks()))
        return self

    @property
    def title(self) -> Optional[str]:
        return self.metadata.title

    def get_image(self, resource_id: Optional[str]) -> Optional[ImageResource]:
        """Look up an image resource by id; ``None`` when it does not exist."""
        if not resource_id:
            return None
        return self._images.get(resource_id)

    def iter_blocks(self) -> Iterator[Block]:
        """Walk every block in the tree, depth first, in document order."""
        for section in self.sections:
            yield from _walk(section.blocks)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, json_path: Path) -> Document:
        """
        Load a document from a JSON file.

        Args:
            json_path: Path to the JSON file

        Returns:
            Validated Document

        Raises:
            FileNotFoundError: If the file doesn't exist
            pydantic.ValidationError: If the payload is not a valid document
        """
        json_path = Path(json_path)
        if not json_path.exists():
            raise FileNotFoundError(f"Document file not found: {json_path}")

        with open(json_path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> Document:
        """
        Load a document from a YAML file.

        Raises:
            ImportError: If pyyaml is not installed
            FileNotFoundError: If the file doesn't exist
        """
        try:
            import yaml
        except ImportError as err:
            raise ImportError(
                "PyYAML is required for YAML documents. Install with: pip install docrender[yaml]"
            ) from err

        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Document file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            return cls.from_dict(yaml.safe_load(f) or {})


def _walk(blocks: list[Block]) -> Iterator[Block]:
    for block in blocks:
        yield block
        yield from _walk(list(block.iter_children()))


def _ensure_unique(kind: str, identifiers: Iterator[str]) -> None:
    seen: set[str] = set()
    for identifier in identifiers:
        if identifier in seen:
            raise ValueError(f"Duplicate {kind} id: {identifier!r}")
        seen.add(identifier)


for _model in (
    ListItemBlock,
    UnorderedListBlock,
    OrderedListBlock,
    TableCell,
    TableRow,
    TableRowGroup,
    TableBlock,
    Section,
    Document,
):
    _model.model_rebuild()
