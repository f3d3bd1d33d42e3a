"""Shared traversal and renderer interface."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar, Union

from ..models.document import (
    Block,
    BlockType,
    Document,
    ImageReferenceBlock,
    ImageResource,
)

T = TypeVar("T")

_DISPATCH = {
    BlockType.PARAGRAPH: "visit_paragraph",
    BlockType.TEXT_CONTENT: "visit_text_content",
    BlockType.HEADER: "visit_header",
    BlockType.UNORDERED_LIST: "visit_list",
    BlockType.ORDERED_LIST: "visit_list",
    BlockType.IMAGE_REFERENCE: "visit_image",
    BlockType.TABLE: "visit_table",
    BlockType.QUOTE: "visit_quote",
    BlockType.CODE_BLOCK: "visit_code",
    BlockType.HORIZONTAL_RULE: "visit_rule",
    BlockType.CUSTOM: "visit_custom",
}


class BlockVisitor(ABC, Generic[T]):
    """
    Walks blocks of one document and dispatches on the block tag.

    Subclasses override the ``visit_*`` hooks for the block types their
    output format supports. Every hook falls back to ``generic_visit``,
    which records a diagnostic and renders nothing, so an unsupported block
    never aborts a render. Instances are created per render call.
    """

    def __init__(self, document: Document):
        self.document = document
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def visit(self, block: Block, depth: int = 0) -> Optional[T]:
        method_name = _DISPATCH.get(block.type, "generic_visit")
        result: Optional[T] = getattr(self, method_name)(block, depth)
        return result

    def visit_blocks(self, blocks: Iterable[Block], depth: int = 0) -> list[T]:
        """Visit blocks in order, dropping those that render to nothing."""
        results = []
        for block in blocks:
            result = self.visit(block, depth)
            if result is None or result == "":
                continue
            results.append(result)
        return results

    def generic_visit(self, block: Block, depth: int) -> Optional[T]:
        self.logger.debug(f"Skipping unsupported block type {block.type.value} (id={block.id})")
        return None

    def visit_paragraph(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_text_content(self, block: Any, depth: int) -> Optional[T]:
        return self.visit_paragraph(block, depth)

    def visit_header(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_list(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_image(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_table(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_quote(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_code(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_rule(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def visit_custom(self, block: Any, depth: int) -> Optional[T]:
        return self.generic_visit(block, depth)

    def resolve_image(
        self, block: ImageReferenceBlock
    ) -> tuple[str, str, Optional[ImageResource]]:
        """
        Resolve an image reference against the document's resources.

        Args:
            block: The IMAGE_REFERENCE block

        Returns:
            Tuple of (src, alt, resource). When the resource is missing, src
            and alt come from the block's own fallbacks and resource is None.
        """
        resource = self.document.get_image(block.resource_id)
        if resource is not None:
            alt = resource.alt_text or block.alt_text or ""
            return resource.display_url, alt, resource

        self.logger.warning(
            f"Unresolved image resource {block.resource_id!r} (block id={block.id}); "
            f"using block fallback"
        )
        return block.src or "", block.alt_text or "", None


R = TypeVar("R")


class BaseRenderer(ABC, Generic[R]):
    """Base class for document renderers.

    Renderers turn a canonical Document into one output format. They keep
    only immutable options, so one instance may serve concurrent renders.
    """

    def __init__(self, options: Optional[Any] = None):
        """Initialize renderer.

        Args:
            options: Renderer-specific options model (defaults when omitted)
        """
        self.options = options if options is not None else self.default_options()
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @classmethod
    @abstractmethod
    def default_options(cls) -> Any:
        """Build the default options model for this renderer."""
        pass

    @abstractmethod
    def render(self, document: Optional[Document]) -> R:
        """Render a document.

        Args:
            document: Canonical document, or None

        Returns:
            Rendered output; empty for None or a document without content
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format, including the dot."""
        pass

    def serialize(self, rendered: R) -> str:
        """Turn rendered output into file content."""
        return str(rendered)

    def save_rendered(self, document: Optional[Document], file_path: Union[str, Path]) -> Path:
        """Render and save a document to file.

        Args:
            document: Document to render
            file_path: Destination file path

        Returns:
            Path to saved file
        """
        file_path = Path(file_path)
        content = self.serialize(self.render(document))

        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)

        self.logger.debug(f"Saved rendered output to {file_path}")

        return file_path
