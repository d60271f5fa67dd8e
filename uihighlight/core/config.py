"""Configuration management for the UI highlight generator."""

import os
import re

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class Config(BaseSettings):
    """Configuration class for the highlight pipeline and its API."""

    # Highlight style
    highlight_color: str = Field(default="#ffff00", description="Stroke color as #rrggbb")
    highlight_dash_on: int = Field(default=25, description="Dash length in pixels")
    highlight_dash_off: int = Field(default=25, description="Gap length in pixels")
    highlight_stroke_width: int = Field(default=15, description="Stroke width in pixels")

    # Layout dump parsing
    layout_node_tag: str = Field(default="node")
    bounds_attribute: str = Field(default="bounds")

    # Batch behaviour
    status_clear_delay: float = Field(default=2.0, description="Seconds before DONE is cleared")
    output_dir: str = Field(default="highlights")

    # Logging
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False)
    log_dir: str = Field(default="logs")

    # API Configuration
    api_host: str = Field(default="localhost")
    api_port: int = Field(default=8000)
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    class Config:
        """Pydantic configuration for environment loading."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore unexpected env vars rather than raising errors

    def validate_config(self) -> bool:
        """Validate configuration values."""
        if not _HEX_COLOR.match(self.highlight_color):
            raise ValueError(f"Highlight color must look like #rrggbb, got {self.highlight_color!r}")

        if self.highlight_stroke_width <= 0:
            raise ValueError("Highlight stroke width must be positive")

        if self.highlight_dash_on <= 0 or self.highlight_dash_off < 0:
            raise ValueError("Dash pattern must have a positive dash and a non-negative gap")

        if self.status_clear_delay < 0:
            raise ValueError("Status clear delay must not be negative")

        return True

    def get_output_path(self) -> str:
        """Get the full path to the output directory."""
        return os.path.join(os.getcwd(), self.output_dir)


# Global configuration instance
config = Config()
