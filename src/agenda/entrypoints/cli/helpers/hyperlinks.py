"""OSC-8 hyperlink utilities for the agenda CLI.

Detects whether the active text stream supports OSC-8 terminal hyperlinks and
renders a URL as a clickable link, falling back to plain text otherwise.
"""

import os
import sys
from typing import TextIO

_OSC8_TERMINALS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: File-like text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``True`` if hyperlinks should be emitted; ``False`` otherwise.

    Notes:
        - Returns ``False`` when the stream is not a TTY (e.g., piped or redirected).
        - Uses a conservative allowlist of terminal identifiers.
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in _OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Return an OSC-8 hyperlink, or plain text on unsupported terminals.

    Args:
        url: Target URL.
        label: Text to show instead of the URL; the URL itself when omitted.
    """
    text = label or url
    if not supports_osc8():
        return text if label is None else f"{label} ({url})"
    return f"\x1b]8;;{url}\x07{text}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
