"""
docrender - Render canonical scraped documents to Markdown, HTML and slides.

Usage:
    from docrender import Document, render_html, render_markdown, render_slides

    document = Document.from_json(Path("page.json"))

    markdown = render_markdown(document)
    html = render_html(document)
    slides = [slide.to_dict() for slide in render_slides(document)]
"""

__version__ = "1.0.0"

from .logging_config import setup_logging
from .models.config import HtmlOptions, MarkdownOptions, RenderConfig, SlideOptions
from .models.document import (
    Block,
    BlockType,
    Document,
    DocumentMetadata,
    ImageResource,
    Section,
)
from .models.slides import SlideDescriptor
from .rendering import (
    HtmlRenderer,
    MarkdownRenderer,
    SlideRenderer,
    get_renderer,
    render_formats,
    render_html,
    render_markdown,
    render_slides,
)

__all__ = [
    "__version__",
    # Model
    "Block",
    "BlockType",
    "Document",
    "DocumentMetadata",
    "ImageResource",
    "Section",
    "SlideDescriptor",
    # Config
    "HtmlOptions",
    "MarkdownOptions",
    "RenderConfig",
    "SlideOptions",
    # Rendering
    "HtmlRenderer",
    "MarkdownRenderer",
    "SlideRenderer",
    "get_renderer",
    "render_formats",
    "render_html",
    "render_markdown",
    "render_slides",
    # Logging
    "setup_logging",
]
