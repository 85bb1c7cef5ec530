"""Configuration for the local accessibility checks."""

from dataclasses import dataclass

from .color import Color, parse_color


@dataclass
class AuditOptions:
    """Configuration options for the contrast and focus checks."""
    # Page default painted behind every background layer
    canvas_color: str = "#ffffff"
    # Elements with more child elements than this are treated as containers
    max_child_elements: int = 3
    # WCAG 2.1 AA minimums
    normal_text_ratio: float = 4.5
    large_text_ratio: float = 3.0
    large_text_px: float = 24.0
    bold_large_text_px: float = 18.66
    bold_weight: int = 700
    # Contrast findings with any ratio below this are critical
    critical_ratio: float = 2.0
    # Which local checks run
    run_contrast_check: bool = True
    run_focus_check: bool = True

    def __post_init__(self):
        canvas = parse_color(self.canvas_color)
        if canvas is None:
            raise ValueError(f"Unsupported canvas color: {self.canvas_color!r}")
        if not canvas.is_opaque:
            raise ValueError(f"Canvas color must be opaque: {self.canvas_color!r}")

    @property
    def canvas(self) -> Color:
        return parse_color(self.canvas_color)
