"""Formatters package for logboard output formatting.

Usage:
    styles = StyleFormatter(no_color=False)
    symbols = SymbolsFormatter(no_color=False)
    line = styles.success(f"{symbols.Check} build")
"""

from .output import OutputFormatter
from .styles import StyleFormatter, Styles
from .symbols import DEFAULT_FRAMES, Symbol, Symbols, SymbolsFormatter

__all__ = [
    "DEFAULT_FRAMES",
    "OutputFormatter",
    "StyleFormatter",
    "Styles",
    "Symbol",
    "Symbols",
    "SymbolsFormatter",
]
