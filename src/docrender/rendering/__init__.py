"""Renderers from the canonical document to output formats."""

from typing import Any, Optional, Union

from ..models.config import RenderConfig
from ..models.document import Document
from ..models.slides import SlideDescriptor
from .base import BaseRenderer, BlockVisitor
from .html import HtmlRenderer, render_html
from .markdown import FrontmatterBuilder, MarkdownRenderer, render_markdown
from .slides import SlideRenderer, render_slides

__all__ = [
    "BaseRenderer",
    "BlockVisitor",
    "FrontmatterBuilder",
    "HtmlRenderer",
    "MarkdownRenderer",
    "SlideRenderer",
    "get_renderer",
    "render_formats",
    "render_html",
    "render_markdown",
    "render_slides",
]

RENDERERS: dict[str, type[BaseRenderer[Any]]] = {
    "markdown": MarkdownRenderer,
    "html": HtmlRenderer,
    "slides": SlideRenderer,
}


def get_renderer(format_name: str, **kwargs: Any) -> BaseRenderer[Any]:
    """Get renderer instance by name.

    Args:
        format_name: Format name ('markdown', 'html', 'slides')
        **kwargs: Renderer constructor arguments (e.g. options)

    Returns:
        Renderer instance

    Raises:
        ValueError: If format name is unknown
    """
    renderer_class = RENDERERS.get(format_name.lower())
    if not renderer_class:
        raise ValueError(
            f"Unknown format: {format_name}. " f"Available formats: {', '.join(RENDERERS.keys())}"
        )

    return renderer_class(**kwargs)  # type: ignore[abstract]


def render_formats(
    document: Optional[Document],
    formats: Optional[list[str]] = None,
    config: Optional[RenderConfig] = None,
) -> dict[str, Union[str, list[SlideDescriptor]]]:
    """Render one document into several formats.

    Each requested format gets its own renderer; the document is passed to
    each of them unmodified.

    Args:
        document: Canonical document, or None
        formats: Format names; defaults to ``config.formats``
        config: Render configuration supplying per-format options

    Returns:
        Mapping of format name to rendered output, in request order

    Raises:
        ValueError: If a format name is unknown
    """
    config = config or RenderConfig()
    requested = formats if formats is not None else list(config.formats)
    options = {"markdown": config.markdown, "html": config.html, "slides": config.slides}

    outputs: dict[str, Union[str, list[SlideDescriptor]]] = {}
    for format_name in requested:
        name = format_name.lower()
        renderer = get_renderer(name, options=options.get(name))
        outputs[name] = renderer.render(document)
    return outputs
