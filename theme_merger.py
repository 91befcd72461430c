"""
Theme Merger
============

Overlay a partial, user-supplied theme table on top of a complete base theme.

Merging is per field: setting only [theme.border] active keeps the default
inactive border color. Sections and fields the theme does not define are
rejected so typos surface instead of being silently ignored.
"""

# ============================================================================
# IMPORTS
# ============================================================================

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional

from color import parse_color
from error_handling import ColorError, InvalidSection, UnknownField
from theme import SECTION_NAMES, THEME_KEY, Theme, section_field_names

logger = logging.getLogger("aform.theme_merger")


# ============================================================================
# MERGE
# ============================================================================

def merge_theme(base: Theme, override: Optional[Mapping[str, Any]]) -> Theme:
    """
    Overlay *override* on *base*

    Args:
        base: Complete theme supplying every unspecified color
        override: {section: {field: raw color}}; None or empty for no changes

    Returns:
        New Theme; *base* is left untouched

    Raises:
        InvalidSection: override or one of its sections is not a table
        UnknownField: unknown section or field name
        ColorError: a color failed to decode (context names section and field)
    """
    if override is None:
        return base

    if not isinstance(override, Mapping):
        raise InvalidSection(
            f"'{THEME_KEY}' must be a table of sections, got {type(override).__name__}",
            context={"section": THEME_KEY, "value": override}
        )

    if not override:
        return base

    unknown = [name for name in override if name not in SECTION_NAMES]
    if unknown:
        raise UnknownField(
            f"Unknown theme section '{unknown[0]}'. "
            f"Valid sections: {', '.join(SECTION_NAMES)}",
            context={"section": unknown[0]}
        )

    sections = {}
    for section, values in override.items():
        sections[section] = _merge_section(section, getattr(base, section), values)

    return replace(base, **sections)


def _merge_section(section: str, base_colors: Any, values: Any) -> Any:
    """Overlay one section's fields on its base dataclass"""
    if not isinstance(values, Mapping):
        raise InvalidSection(
            f"Theme section '{section}' must be a table, got {type(values).__name__}",
            context={"section": section, "value": values}
        )

    known = section_field_names(section)
    changes = {}

    for name, raw in values.items():
        if name not in known:
            raise UnknownField(
                f"Unknown color '{name}' in section '{section}'. "
                f"Valid colors: {', '.join(known)}",
                context={"section": section, "field": name}
            )

        try:
            changes[name] = parse_color(raw)
        except ColorError as e:
            e.add_context(section=section, field=name, value=raw)
            raise

        logger.debug("Theme override %s.%s = %s", section, name, changes[name].to_hex())

    return replace(base_colors, **changes) if changes else base_colors
