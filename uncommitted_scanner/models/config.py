"""
Configuration models for the scanner.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from ..utils.logging import LogLevel

MIN_BOX_WIDTH = 66
COLOR_MODES = ["auto", "always", "never"]


@dataclass
class ScannerConfig:
    """Runtime settings for a scan and its report."""

    box_width: int = 80
    color: str = "auto"  # "auto", "always" or "never"
    git_executable: str = "git"
    git_timeout: Optional[float] = 30.0
    exclude_dirs: List[str] = field(default_factory=list)
    log_level: str = "WARNING"
    log_dir: Optional[str] = None

    def validate(self) -> bool:
        """Validate scanner configuration."""
        if not isinstance(self.box_width, int) or isinstance(self.box_width, bool):
            raise ValueError("box_width must be an integer")

        if self.box_width < MIN_BOX_WIDTH:
            raise ValueError(f"box_width must be at least {MIN_BOX_WIDTH}")

        if self.color not in COLOR_MODES:
            raise ValueError(f"color must be one of: {COLOR_MODES}")

        if not self.git_executable:
            raise ValueError("git_executable cannot be empty")

        if self.git_timeout is not None:
            if not isinstance(self.git_timeout, (int, float)):
                raise ValueError("git_timeout must be a number")
            if self.git_timeout < 0:
                raise ValueError("git_timeout cannot be negative")

        if not isinstance(self.exclude_dirs, list):
            raise ValueError("exclude_dirs must be a list")

        for name in self.exclude_dirs:
            if not isinstance(name, str) or not name:
                raise ValueError("exclude_dirs entries must be non-empty strings")

        valid_levels = [level.value for level in LogLevel]
        if str(self.log_level).upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")

        return True

    @property
    def effective_timeout(self) -> Optional[float]:
        """Timeout passed to subprocess; zero means no timeout."""
        if not self.git_timeout:
            return None
        return float(self.git_timeout)

    def use_color(self, stream: TextIO) -> bool:
        """Resolve the color mode against the output stream."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False

        if os.getenv("NO_COLOR"):
            return False

        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())
