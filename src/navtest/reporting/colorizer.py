"""ANSI styling for console output."""
from __future__ import annotations

from typing import Dict, Optional

from colorama import Back, Fore, Style

STYLES: Dict[str, str] = {
    "ERROR": Fore.WHITE + Back.RED + Style.BRIGHT,
    "INFO": Fore.GREEN + Style.BRIGHT,
    "TRACE": Fore.GREEN + Style.BRIGHT,
    "PARAMETER": Fore.CYAN,
    "COMMENT": Fore.YELLOW,
    "WARNING": Fore.RED + Style.BRIGHT,
    "GREEN_BAR": Fore.WHITE + Back.GREEN + Style.BRIGHT,
    "RED_BAR": Fore.WHITE + Back.RED + Style.BRIGHT,
    "INFO_BAR": Fore.CYAN + Style.BRIGHT,
}


class Colorizer:
    """Wraps text in the ANSI sequence registered for a named style."""

    def __init__(self, *, use_color: bool = True) -> None:
        self.use_color = use_color

    def colorize(self, text: str, style: Optional[str] = None) -> str:
        if not self.use_color or not style:
            return text
        prefix = STYLES.get(style)
        if prefix is None:
            return text
        return f"{prefix}{text}{Style.RESET_ALL}"


def fill_blanks(text: str, pad: int = 80) -> str:
    """Right-pad ``text`` with spaces so styled bars span the line."""

    return text.ljust(pad)
