"""Normalization of raw keypresses into binding names."""

# Sequences as returned by click.getchar on POSIX terminals and Windows consoles
KEY_NAMES = {
    "\r": "enter",
    "\n": "enter",
    " ": "space",
    "\t": "tab",
    "\x1b": "esc",
    "\x7f": "backspace",
    "\x03": "ctrl+c",
    "\x04": "ctrl+d",
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
    "\xe0H": "up",
    "\xe0P": "down",
    "\xe0K": "left",
    "\xe0M": "right",
    "\x00H": "up",
    "\x00P": "down",
}


def normalize_key(raw: str) -> str:
    """Map a raw key sequence to the name used in ``KeyBindings``."""
    if raw in KEY_NAMES:
        return KEY_NAMES[raw]
    if len(raw) == 1:
        return raw.lower()
    return raw
