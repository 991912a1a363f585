"""
Resolution context: the tag names, prefix and normalization flag used while
resolving fields, plus the help text accumulated along the way.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Mapping


@dataclass
class ResolutionContext:
    """State for one configuration pass. Not shared between passes."""

    tag: str = "env"
    tag_default: str = "default"
    kebab_cfg_to_snake_env: bool = False
    prefix: str = ""
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    platform: str = field(default_factory=lambda: sys.platform)
    help_lines: list[str] = field(default_factory=list)
    usage: Callable[..., None] | None = None

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    @property
    def help_text(self) -> str:
        return "".join(self.help_lines)
