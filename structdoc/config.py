"""
Configuration for structdoc structure inference.

Configuration is passed explicitly to every entry point; nothing is held
in module state, so independent documents can be processed side by side.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from structdoc.exceptions import ConfigurationError
from structdoc.styles import DEFAULT_STYLE, STYLES


@dataclass
class StructureConfig:
    """
    Configuration for structure inference.

    All options have sensible defaults. Create a config only
    if you need to customize behavior.

    Example:
        >>> config = StructureConfig(style="apa", clean_text=False)
        >>> doc = structdoc.convert("thesis.txt", config)
    """

    # Layout style handed to the renderer
    style: str = DEFAULT_STYLE
    styles_file: Path | None = None  # Extra styles (YAML), see styles.load_styles

    # Cleanup before classification
    clean_text: bool = True

    # Input options (used by convert())
    input_format: Literal["auto", "text", "html"] = "auto"
    encoding: str = "utf-8"

    def __post_init__(self):
        """Validate configuration."""
        self.style = self.style.lower()

        valid_input_formats = ("auto", "text", "html")
        if self.input_format not in valid_input_formats:
            raise ConfigurationError(
                f"input_format must be one of {valid_input_formats}, "
                f"got {self.input_format!r}"
            )

        if self.styles_file is not None:
            # Style names are checked once the file is loaded
            self.styles_file = Path(self.styles_file)
        elif self.style not in STYLES:
            raise ConfigurationError(
                f"style must be one of {tuple(sorted(STYLES))}, got {self.style!r}"
            )
