"""Front-end prompters.

``dialogs`` imports tkinter; import it only where a display is available.
"""

from .console import ConsolePrompter  # noqa: F401

__all__ = [
    "ConsolePrompter",
]
