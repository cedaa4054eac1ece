from .layout import WORKSHEET_PRESETS, LayoutConfig, preset_layout
from .render import build_worksheet, render_worksheet

__all__ = ["WORKSHEET_PRESETS", "LayoutConfig", "preset_layout", "build_worksheet", "render_worksheet"]
