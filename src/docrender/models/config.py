"""Pydantic configuration models for docrender."""

import json
import logging
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..logging_config import setup_logging

FormatName = Literal["markdown", "html", "slides"]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class MarkdownOptions(BaseModel):
    """Options for the Markdown renderer."""

    include_frontmatter: bool = Field(
        False,
        description="Prepend YAML frontmatter built from the document metadata",
    )
    table_separator_width: int = Field(
        14,
        ge=3,
        description="Number of dashes per column in a table separator row",
    )

    model_config = {"extra": "forbid", "frozen": True}


class HtmlOptions(BaseModel):
    """Options for the HTML renderer."""

    indent_width: int = Field(2, ge=0, description="Spaces per nesting level")
    escape_text: bool = Field(True, description="HTML-escape block text")
    render_images: bool = Field(True, description="Emit <img> markup for image references")

    model_config = {"extra": "forbid", "frozen": True}


class SlideOptions(BaseModel):
    """Options for the slide pre-render transformer."""

    nested_list_text: Literal["preserve", "drop"] = Field(
        "preserve",
        description=(
            "What happens to a list item's own text when it also holds a nested list: "
            "'preserve' keeps the text followed by the nested list, "
            "'drop' lets the nested list replace the item"
        ),
    )

    model_config = {"extra": "forbid", "frozen": True}


class RenderConfig(BaseModel):
    """
    Root configuration model for docrender.

    Example:
        config = RenderConfig(
            formats=["markdown", "slides"],
            html=HtmlOptions(escape_text=False),
        )

    YAML format:
        formats: [markdown, html]
        markdown:
          include_frontmatter: true
        slides:
          nested_list_text: drop
        log_level: debug
    """

    markdown: MarkdownOptions = Field(default_factory=MarkdownOptions)
    html: HtmlOptions = Field(default_factory=HtmlOptions)
    slides: SlideOptions = Field(default_factory=SlideOptions)

    formats: list[FormatName] = Field(
        default_factory=lambda: ["markdown", "html", "slides"],
        description="Output formats produced by render_formats()",
    )
    log_level: str = Field("INFO", description="Logging level")

    model_config = {"extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level. Must be one of: {sorted(VALID_LOG_LEVELS)}")
        return level

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        return cls.model_validate(config_dict)

    @classmethod
    def from_json(cls, json_path: Path) -> "RenderConfig":
        """
        Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        json_path = Path(json_path)
        if not json_path.exists():
            raise FileNotFoundError(f"Config file not found: {json_path}")

        with open(json_path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "RenderConfig":
        """
        Load configuration from a YAML file.

        Raises:
            ImportError: If pyyaml is not installed
            FileNotFoundError: If config file doesn't exist
        """
        try:
            import yaml
        except ImportError as err:
            raise ImportError(
                "PyYAML is required for YAML config. Install with: pip install docrender[yaml]"
            ) from err

        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    def configure_logging(
        self, log_file: Optional[Union[str, Path]] = None, force: bool = False
    ) -> logging.Logger:
        """
        Apply ``log_level`` to the docrender package logger.

        Args:
            log_file: Optional file that also receives log records
            force: Replace handlers installed by an earlier call

        Returns:
            The configured package logger
        """
        return setup_logging(level=self.log_level, log_file=log_file, force=force)

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json"), default_flow_style=False)
