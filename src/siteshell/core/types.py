"""Core type definitions."""

from typing import Literal

Visibility = Literal["public", "authenticated"]
Position = Literal["primary", "secondary"]

Theme = Literal["light", "dark", "high-contrast", "system"]
ResolvedTheme = Literal["light", "dark", "high-contrast"]
SystemPreference = Literal["light", "dark"]

Breakpoint = Literal["mobile", "tablet", "desktop"]

VISIBILITIES: tuple[Visibility, ...] = ("public", "authenticated")
POSITIONS: tuple[Position, ...] = ("primary", "secondary")
THEMES: tuple[Theme, ...] = ("light", "dark", "system", "high-contrast")
RESOLVED_THEMES: tuple[ResolvedTheme, ...] = ("light", "dark", "high-contrast")
