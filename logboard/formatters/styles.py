"""Style utilities for terminal output."""

from rich.text import Text


class Styles:
    """Rich style strings for each display role."""

    SUCCESS = "green"
    FAILURE = "red"
    NEUTRAL = "blue"
    ERROR = "bold red"
    DIM = "bright_black"


class StyleFormatter:
    """Formatter producing styled Rich text.

    With no_color=True every method returns unstyled text, which keeps
    rendered frames comparable as plain strings.
    """

    def __init__(self, no_color: bool = False):
        """Initialize the style formatter.

        Args:
            no_color: If True, disable all styling
        """
        self.enabled = not no_color

    def stylize(self, text: str, style: str) -> Text:
        """Apply a style to text.

        Args:
            text: Text to style
            style: Rich style string

        Returns:
            Styled text (or plain text if styling is disabled)
        """
        if not self.enabled:
            return Text(text)
        return Text(text, style=style)

    def success(self, text: str) -> Text:
        return self.stylize(text, Styles.SUCCESS)

    def failure(self, text: str) -> Text:
        return self.stylize(text, Styles.FAILURE)

    def neutral(self, text: str) -> Text:
        return self.stylize(text, Styles.NEUTRAL)

    def error(self, text: str) -> Text:
        return self.stylize(text, Styles.ERROR)

    def dim(self, text: str) -> Text:
        return self.stylize(text, Styles.DIM)
