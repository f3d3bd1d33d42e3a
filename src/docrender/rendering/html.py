"""Canonical document to an HTML fragment."""

from __future__ import annotations

from html import escape
from typing import Any, Optional

from ..models.config import HtmlOptions
from ..models.document import (
    LIST_TYPES,
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
from .base import BaseRenderer, BlockVisitor


class _HtmlVisitor(BlockVisitor[str]):
    """Returns each block as markup indented relative to its own start tag."""

    def __init__(self, document: Document, options: HtmlOptions):
        super().__init__(document)
        self.options = options
        self.unit = " " * options.indent_width

    def indent(self, markup: str) -> str:
        return "\n".join(f"{self.unit}{line}" for line in markup.split("\n"))

    def text(self, value: str) -> str:
        return escape(value, quote=False) if self.options.escape_text else value

    def visit_paragraph(self, block: Any, depth: int) -> str:
        return f"<p>{self.text(block.text)}</p>"

    def visit_text_content(self, block: Any, depth: int) -> str:
        return self.text(block.text)

    def visit_header(self, block: HeaderBlock, depth: int) -> str:
        return f"<h{block.level}>{self.text(block.text)}</h{block.level}>"

    def visit_list(self, block: ListBlock, depth: int) -> str:
        tag = "ol" if block.type == BlockType.ORDERED_LIST else "ul"
        if not block.children:
            return f"<{tag}></{tag}>"

        items = [self.indent(self._list_item(item, depth)) for item in block.children]
        return f"<{tag}>\n" + "\n".join(items) + f"\n</{tag}>"

    def _list_item(self, item: ListItemBlock, depth: int) -> str:
        # An item is rendered inline unless it holds a nested list or more
        # than one non-list child.
        content_parts = []
        nested_lists = []
        non_list_children = 0

        for child in item.children:
            if child.type in LIST_TYPES:
                nested_lists.append(self.indent(self.visit_list(child, depth + 1)))
            else:
                non_list_children += 1
                rendered = self.visit(child, depth + 1)
                if rendered:
                    content_parts.append(rendered)

        main_content = "".join(content_parts)

        if nested_lists or non_list_children > 1:
            markup = "<li>"
            if main_content:
                markup += "\n" + self.indent(main_content)
            for nested in nested_lists:
                markup += "\n" + nested
            return markup + "\n</li>"

        return f"<li>{main_content}</li>"

    def visit_image(self, block: ImageReferenceBlock, depth: int) -> str:
        if not self.options.render_images:
            return ""

        src, alt, resource = self.resolve_image(block)
        if resource is None and not src:
            return ""

        img = f'<img src="{escape(src)}" alt="{escape(alt)}">'
        if not block.caption:
            return img

        caption = f"<figcaption>{self.text(block.caption)}</figcaption>"
        return "<figure>\n" + self.indent(img) + "\n" + self.indent(caption) + "\n</figure>"

    def visit_table(self, block: TableBlock, depth: int) -> str:
        sections = []
        if block.caption:
            sections.append(f"<caption>{self.text(block.caption)}</caption>")

        if block.is_structural:
            tags = {"header": "thead", "body": "tbody", "footer": "tfoot"}
            for group in block.row_groups:
                rows = [
                    self._row([(cell.text, cell.header or group.kind == "header") for cell in row.cells])
                    for row in group.rows
                ]
                sections.append(self._group(tags[group.kind], rows))
        else:
            if block.headers:
                sections.append(self._group("thead", [self._row([(h, True) for h in block.headers])]))
            if block.rows:
                body = [self._row([(cell, False) for cell in row]) for row in block.rows]
                sections.append(self._group("tbody", body))

        if not sections:
            return "<table></table>"
        return "<table>\n" + "\n".join(self.indent(part) for part in sections) + "\n</table>"

    def _group(self, tag: str, rows: list[str]) -> str:
        if not rows:
            return f"<{tag}></{tag}>"
        return f"<{tag}>\n" + "\n".join(self.indent(row) for row in rows) + f"\n</{tag}>"

    def _row(self, cells: list[tuple[str, bool]]) -> str:
        markup = []
        for value, is_header in cells:
            tag = "th" if is_header else "td"
            markup.append(self.indent(f"<{tag}>{self.text(value)}</{tag}>"))
        if not markup:
            return "<tr></tr>"
        return "<tr>\n" + "\n".join(markup) + "\n</tr>"

    def visit_quote(self, block: QuoteBlock, depth: int) -> str:
        if not block.attribution:
            return f"<blockquote>{self.text(block.text)}</blockquote>"

        cite = f"<cite>{self.text(block.attribution)}</cite>"
        return (
            "<blockquote>\n"
            + self.indent(f"<p>{self.text(block.text)}</p>")
            + "\n"
            + self.indent(cite)
            + "\n</blockquote>"
        )

    def visit_code(self, block: CodeBlock, depth: int) -> str:
        # Newlines become character references so indentation never leaks into <pre>.
        code = escape(block.text, quote=False).replace("\n", "&#10;")
        class_attr = f' class="language-{escape(block.language)}"' if block.language else ""
        return f"<pre><code{class_attr}>{code}</code></pre>"

    def visit_rule(self, block: Any, depth: int) -> str:
        return "<hr>"

    def render_section(self, section: Section) -> str:
        id_attr = f' id="{escape(section.id)}"' if section.id else ""
        parts = []

        if section.header:
            parts.append(self.indent(f"<h1>{self.text(section.header)}</h1>"))

        for markup in self.visit_blocks(section.blocks):
            parts.append(self.indent(markup))

        if not parts:
            return f"<section{id_attr}>\n</section>" if section.id else ""

        return f"<section{id_attr}>\n" + "\n".join(parts) + "\n</section>"


class HtmlRenderer(BaseRenderer[str]):
    """
    Renders a canonical Document to an HTML fragment.

    The output is a sequence of ``<section>`` elements; wrapping it in a full
    page is left to the caller.

    Example:
        renderer = HtmlRenderer(HtmlOptions(indent_width=4))
        html = renderer.render(document)
    """

    @classmethod
    def default_options(cls) -> HtmlOptions:
        return HtmlOptions()

    def render(self, document: Optional[Document]) -> str:
        """
        Render a document to HTML.

        Args:
            document: Canonical document, or None

        Returns:
            HTML fragment string; empty when there are no sections
        """
        if document is None or not document.sections:
            return ""

        visitor = _HtmlVisitor(document, self.options)
        parts = [visitor.render_section(section) for section in document.sections]

        self.logger.debug(f"Rendered {len(document.sections)} sections to HTML")

        return "\n".join(part for part in parts if part).strip()

    def get_file_extension(self) -> str:
        """Get HTML extension.

        Returns:
            '.html'
        """
        return ".html"


def render_html(document: Optional[Document], options: Optional[HtmlOptions] = None) -> str:
    """Render a document to HTML with a one-off renderer."""
    return HtmlRenderer(options).render(document)
