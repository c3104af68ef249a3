"""Output utilities for terminal display with Rich console."""

from typing import Optional, Union

from rich.console import Console
from rich.text import Text

from .styles import StyleFormatter
from .symbols import SymbolsFormatter


class OutputFormatter:
    """Handles formatted output using a Rich console, bundling styles and symbols."""

    def __init__(self, no_color: bool = False, console: Optional[Console] = None):
        """Initialize output formatter.

        Args:
            no_color: If True, disable all colors and styling
            console: Console to print to (a new one is created if omitted)
        """
        self._no_color = no_color
        self._console = console or Console(
            no_color=no_color,
            force_terminal=None,
            highlight=False,
        )
        self._styles = StyleFormatter(no_color=no_color)
        self._symbols = SymbolsFormatter(no_color=no_color)

    @property
    def console(self) -> Console:
        """Get the underlying Rich console."""
        return self._console

    @property
    def styles(self) -> StyleFormatter:
        """Get the style formatter."""
        return self._styles

    @property
    def symbols(self) -> SymbolsFormatter:
        """Get the symbols formatter for unicode/ASCII symbol access.

        Usage:
            output.symbols.Check  # Returns "✓" or "+"
        """
        return self._symbols

    @property
    def no_color(self) -> bool:
        """Check if colors are disabled."""
        return self._no_color

    def print(self, message: Union[str, Text]) -> None:
        """Print message using Rich console.

        Args:
            message: Message to print (string or Rich Text)
        """
        self._console.print(message, highlight=False)
