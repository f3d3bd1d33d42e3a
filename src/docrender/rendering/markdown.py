"""Canonical document to Markdown."""

from __future__ import annotations

from typing import Any, Optional

from ..models.config import MarkdownOptions
from ..models.document import (
    LIST_TYPES,
    TEXT_TYPES,
    BlockType,
    CodeBlock,
    Document,
    DocumentMetadata,
    HeaderBlock,
    ImageReferenceBlock,
    ListBlock,
    QuoteBlock,
    Section,
    TableBlock,
)
from .base import BaseRenderer, BlockVisitor


LIST_INDENT = "  "


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for Markdown output.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(
            title="Getting Started",
            url="https://docs.example.com/getting-started",
        )
    """

    def build(
        self,
        title: str | None = None,
        url: str | None = None,
        **extra_fields: Any,
    ) -> str:
        """
        Build YAML frontmatter string.

        Args:
            title: Document title
            url: Source URL
            **extra_fields: Additional frontmatter fields; None values are skipped

        Returns:
            YAML frontmatter string (with --- delimiters)
        """
        lines = ["---"]

        if title:
            safe_title = title.replace('"', '\\"')
            lines.append(f'title: "{safe_title}"')

        if url:
            lines.append(f"source: {url}")

        for key, value in extra_fields.items():
            if value is None:
                continue
            if isinstance(value, str):
                safe_value = value.replace('"', '\\"')
                lines.append(f'{key}: "{safe_value}"')
            elif isinstance(value, (list, tuple)):
                lines.append(f"{key}:")
                for item in value:
                    lines.append(f"  - {item}")
            else:
                lines.append(f"{key}: {value}")

        lines.append("---")
        return "\n".join(lines) + "\n\n"

    def build_for(self, metadata: DocumentMetadata) -> str:
        return self.build(
            title=metadata.title,
            url=metadata.source_url,
            author=metadata.author,
            date_scraped=metadata.date_scraped,
            publication_date=metadata.publication_date,
        )


class _MarkdownVisitor(BlockVisitor[str]):
    def __init__(self, document: Document, options: MarkdownOptions):
        super().__init__(document)
        self.options = options

    def visit_paragraph(self, block: Any, depth: int) -> str:
        # Markdown metacharacters pass through untouched.
        return block.text

    def visit_header(self, block: HeaderBlock, depth: int) -> str:
        return f"{'#' * block.level} {block.text}"

    def visit_list(self, block: ListBlock, depth: int) -> str:
        indent = LIST_INDENT * depth
        ordered = block.type == BlockType.ORDERED_LIST
        lines = []

        for position, item in enumerate(block.children, 1):
            if not item.children:
                continue
            marker = f"{position}." if ordered else "-"

            pieces = []
            for child in item.children:
                if child.type in LIST_TYPES:
                    pieces.append(self.visit_list(child, depth + 1))
                elif child.type in TEXT_TYPES:
                    pieces.append(child.text.strip())
                else:
                    rendered = self.visit(child, 0)
                    if rendered:
                        pieces.append(rendered.strip())

            content = "\n".join(pieces)
            lines.append(f"{indent}{marker} {content}")

        return "\n".join(lines)

    def visit_image(self, block: ImageReferenceBlock, depth: int) -> str:
        src, alt, resource = self.resolve_image(block)
        if resource is None and not src:
            return ""

        markdown = f"![{alt}]({src})"
        if block.caption:
            markdown += f"\n*{block.caption}*"
        return markdown

    def visit_table(self, block: TableBlock, depth: int) -> str:
        if block.is_structural:
            return self._structural_table(block)

        lines = []
        if block.headers:
            lines.append(self._row(block.headers))
            lines.append(self._separator(len(block.headers)))
        lines.extend(self._row(row) for row in block.rows)
        return "\n".join(lines)

    def _structural_table(self, block: TableBlock) -> str:
        lines = []
        separated = False
        for group in block.row_groups:
            for index, row in enumerate(group.rows):
                cells = row.texts
                lines.append(self._row(cells))
                if group.kind == "header" and index == 0 and not separated:
                    lines.append(self._separator(len(cells)))
                    separated = True
        return "\n".join(lines)

    def _row(self, cells: list[str]) -> str:
        return f"| {' | '.join(cells)} |"

    def _separator(self, columns: int) -> str:
        dashes = "-" * self.options.table_separator_width
        return "|" + "|".join([dashes] * columns) + "|"

    def visit_quote(self, block: QuoteBlock, depth: int) -> str:
        lines = block.text.splitlines() or [""]
        if block.attribution:
            lines.append(f"— {block.attribution}")
        return "\n".join(f"> {line}" for line in lines)

    def visit_code(self, block: CodeBlock, depth: int) -> str:
        return f"```{block.language or ''}\n{block.text}\n```"

    def visit_rule(self, block: Any, depth: int) -> str:
        return "---"

    def render_section(self, section: Section) -> str:
        header = f"# {section.header}" if section.header else ""
        body = "\n\n".join(self.visit_blocks(section.blocks))

        if header and body:
            return f"{header}\n\n{body}"
        return header or body


class MarkdownRenderer(BaseRenderer[str]):
    """
    Renders a canonical Document to Markdown text.

    Example:
        renderer = MarkdownRenderer()
        markdown = renderer.render(document)
    """

    @classmethod
    def default_options(cls) -> MarkdownOptions:
        return MarkdownOptions()

    def render(self, document: Optional[Document]) -> str:
        """
        Render a document to Markdown.

        Args:
            document: Canonical document, or None

        Returns:
            Markdown string; empty when there are no sections
        """
        if document is None or not document.sections:
            return ""

        visitor = _MarkdownVisitor(document, self.options)
        parts = [visitor.render_section(section) for section in document.sections]
        markdown = "\n\n".join(part for part in parts if part).strip()

        self.logger.debug(f"Rendered {len(document.sections)} sections to Markdown")

        if markdown and self.options.include_frontmatter:
            return FrontmatterBuilder().build_for(document.metadata) + markdown
        return markdown

    def get_file_extension(self) -> str:
        """Get markdown extension.

        Returns:
            '.md'
        """
        return ".md"


def render_markdown(document: Optional[Document], options: Optional[MarkdownOptions] = None) -> str:
    """Render a document to Markdown with a one-off renderer."""
    return MarkdownRenderer(options).render(document)
