"""Runtime settings for calcpad, read from the environment.

CLI options take precedence; these are only the defaults.

    CALCPAD_THEME       dark | light (default: dark)
    CALCPAD_SHOW_STATE  1 / true / yes to print the raw state after each display
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

_TRUTHY = ("1", "true", "yes", "on")


class Theme(str, Enum):
    """Display colour themes."""

    DARK = "dark"
    LIGHT = "light"


@dataclass
class Settings:
    theme: Theme = Theme.DARK
    show_state: bool = False


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from CALCPAD_* variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ValueError: CALCPAD_THEME names an unknown theme.
    """
    env = os.environ if env is None else env
    theme = Theme(env.get("CALCPAD_THEME", Theme.DARK.value).strip().lower())
    show_state = env.get("CALCPAD_SHOW_STATE", "").strip().lower() in _TRUTHY
    return Settings(theme=theme, show_state=show_state)
