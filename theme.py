"""UI theme colors.

This module only holds the theme data model and the built-in default theme.
It does not read any user settings.

User customization is done by overlaying values from aform.toml on top of
DEFAULT_THEME in memory (see theme_merger.py and config_loader.py), never by
mutating DEFAULT_THEME.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Tuple

from color import Color, encode_color


# ============================================================================
# SECTIONS
# ============================================================================

@dataclass(frozen=True)
class BorderColors:
    """Pane border colors"""
    active: Color = Color(0, 255, 255)          # cyan
    inactive: Color = Color(128, 128, 128)      # dark gray


@dataclass(frozen=True)
class RulerColors:
    """Column ruler colors"""
    numbers: Color = Color(128, 128, 128)
    ticks: Color = Color(128, 128, 128)
    pair_line: Color = Color(255, 0, 255)       # magenta


@dataclass(frozen=True)
class StatusBarColors:
    """Status bar, including the mode indicator"""
    background: Color = Color(128, 128, 128)
    position: Color = Color(255, 255, 255)
    alignment_info: Color = Color(0, 255, 255)
    sequence_type: Color = Color(0, 128, 0)
    color_scheme: Color = Color(255, 0, 255)
    structure_info: Color = Color(255, 255, 0)
    selection_info: Color = Color(173, 216, 230)  # light blue

    # Mode indicator
    normal_bg: Color = Color(0, 0, 255)
    normal_fg: Color = Color(255, 255, 255)
    insert_bg: Color = Color(0, 128, 0)
    insert_fg: Color = Color(0, 0, 0)
    command_bg: Color = Color(255, 255, 0)
    command_fg: Color = Color(0, 0, 0)
    search_bg: Color = Color(255, 0, 255)
    search_fg: Color = Color(255, 255, 255)
    visual_bg: Color = Color(100, 100, 180)
    visual_fg: Color = Color(255, 255, 255)


@dataclass(frozen=True)
class IdColumnColors:
    text: Color = Color(0, 255, 255)
    selected_bg: Color = Color(80, 80, 140)
    selected_fg: Color = Color(255, 255, 255)


@dataclass(frozen=True)
class AnnotationColors:
    """Annotation bars (SS_cons, RF, PP_cons, consensus, conservation)"""
    ss_cons_fg: Color = Color(255, 255, 0)
    ss_cons_bg: Color = Color(30, 30, 40)
    ss_cons_paired_fg: Color = Color(0, 0, 0)
    ss_cons_paired_bg: Color = Color(255, 255, 0)
    rf_conserved_fg: Color = Color(0, 128, 0)
    rf_conserved_bg: Color = Color(30, 40, 30)
    rf_variable_fg: Color = Color(128, 128, 128)
    rf_variable_bg: Color = Color(30, 30, 30)
    pp_cons_bg: Color = Color(30, 30, 40)
    consensus_fg: Color = Color(0, 255, 255)
    consensus_bg: Color = Color(30, 40, 30)
    conservation_bg: Color = Color(40, 30, 40)
    label_ss_cons_fg: Color = Color(255, 255, 0)
    label_rf_fg: Color = Color(0, 128, 0)
    label_pp_cons_fg: Color = Color(255, 255, 0)
    label_consensus_fg: Color = Color(0, 255, 255)
    label_conservation_fg: Color = Color(255, 0, 255)


@dataclass(frozen=True)
class SelectionColors:
    """Visual selection, search matches and pair highlighting"""
    visual_bg: Color = Color(80, 80, 140)
    visual_fg: Color = Color(255, 255, 255)
    search_current_bg: Color = Color(255, 255, 0)
    search_current_fg: Color = Color(0, 0, 0)
    search_other_bg: Color = Color(100, 100, 50)
    search_other_fg: Color = Color(255, 255, 255)
    pair_highlight_bg: Color = Color(255, 0, 255)
    pair_highlight_fg: Color = Color(255, 255, 255)
    gap_column_bg: Color = Color(80, 50, 50)    # dim red


@dataclass(frozen=True)
class CommandLineColors:
    command_prefix: Color = Color(255, 255, 0)
    search_prefix: Color = Color(255, 0, 255)
    help_hint: Color = Color(128, 128, 128)


@dataclass(frozen=True)
class MiscColors:
    separator: Color = Color(128, 128, 128)
    tree_dark_theme: Color = Color(255, 255, 255)
    tree_light_theme: Color = Color(0, 0, 0)


# ============================================================================
# THEME
# ============================================================================

@dataclass(frozen=True)
class Theme:
    """Complete UI theme. Every field of every section is always set."""
    border: BorderColors = field(default_factory=BorderColors)
    ruler: RulerColors = field(default_factory=RulerColors)
    status_bar: StatusBarColors = field(default_factory=StatusBarColors)
    id_column: IdColumnColors = field(default_factory=IdColumnColors)
    annotations: AnnotationColors = field(default_factory=AnnotationColors)
    selection: SelectionColors = field(default_factory=SelectionColors)
    command_line: CommandLineColors = field(default_factory=CommandLineColors)
    misc: MiscColors = field(default_factory=MiscColors)

    def get(self, section: str, name: str) -> Color:
        """Look up a color by section and field name"""
        if section not in SECTION_NAMES:
            raise KeyError(f"Unknown theme section: {section}")
        colors = getattr(self, section)
        if name not in section_field_names(section):
            raise KeyError(f"Unknown color in [{section}]: {name}")
        return getattr(colors, name)


DEFAULT_THEME = Theme()

# Namespace in the config file: [theme.border], [theme.ruler], ...
THEME_KEY = "theme"

SECTION_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(Theme))
SECTION_TYPES: Dict[str, type] = {f.name: type(getattr(DEFAULT_THEME, f.name)) for f in fields(Theme)}


def section_field_names(section: str) -> Tuple[str, ...]:
    """Field names defined for *section*"""
    return tuple(f.name for f in fields(SECTION_TYPES[section]))


def theme_to_dict(theme: Theme, fmt: str = "hex") -> Dict[str, Any]:
    """
    Convert a theme to the nested layout used by the config file

    Args:
        theme: Theme to convert
        fmt: Color encoding, 'hex', 'comma' or 'record'

    Returns:
        {"theme": {section: {field: encoded color}}}
    """
    return {
        THEME_KEY: {
            section: {
                name: encode_color(getattr(getattr(theme, section), name), fmt)
                for name in section_field_names(section)
            }
            for section in SECTION_NAMES
        }
    }
