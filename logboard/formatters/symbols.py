"""Symbol definitions with unicode/ASCII fallbacks.

Provides a clean API for accessing symbols that automatically fall back
to ASCII when unicode output is not available or colors are disabled.

Usage:
    symbols = SymbolsFormatter()
    print(symbols.Check)  # Returns "✓" or "+"
    print(symbols.Filled)  # Returns "█" or "#"
"""

import platform
import sys
from dataclasses import dataclass
from functools import cached_property


@dataclass(frozen=True)
class Symbol:
    """A symbol with unicode and ASCII fallback."""

    unicode: str
    ascii: str


class Symbols:
    """Symbol definitions as class attributes."""

    # Status indicators
    Check = Symbol("✓", "+")
    Cross = Symbol("✗", "X")

    # Progress bar
    Filled = Symbol("█", "#")
    Unfilled = Symbol("░", "-")


DEFAULT_FRAMES = ("-", "\\", "|", "/")


class SymbolsFormatter:
    """Provides symbols with automatic unicode/ASCII fallback based on terminal support.

    Unicode is disabled when no_color=True or when the output encoding can't carry it.
    """

    def __init__(self, no_color: bool = False):
        """Initialize the symbols formatter.

        Args:
            no_color: If True, always use ASCII symbols instead of unicode
        """
        self._no_color = no_color

    @cached_property
    def supports_unicode(self) -> bool:
        """Detect if the output stream can display unicode glyphs."""
        if self._no_color:
            return False

        if platform.system() == "Windows":
            return False

        if not hasattr(sys.stdout, "encoding") or sys.stdout.encoding is None:
            return False

        encoding = sys.stdout.encoding.lower()
        unicode_encodings = ["utf-8", "utf8", "utf-16", "utf16"]

        return any(enc in encoding for enc in unicode_encodings)

    def _resolve(self, symbol: Symbol) -> str:
        """Resolve a symbol to unicode or ASCII based on support."""
        return symbol.unicode if self.supports_unicode else symbol.ascii

    @property
    def Check(self) -> str:
        return self._resolve(Symbols.Check)

    @property
    def Cross(self) -> str:
        return self._resolve(Symbols.Cross)

    @property
    def Filled(self) -> str:
        return self._resolve(Symbols.Filled)

    @property
    def Unfilled(self) -> str:
        return self._resolve(Symbols.Unfilled)
