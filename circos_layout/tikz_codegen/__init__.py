"""Layout result → TikZ code generation helpers."""

from .generator import (
    DEFAULT_PALETTE,
    generate_tikz_code,
    generate_tikz_document,
)
from .utils import latex_escape

__all__ = [
    "DEFAULT_PALETTE",
    "generate_tikz_code",
    "generate_tikz_document",
    "latex_escape",
]
