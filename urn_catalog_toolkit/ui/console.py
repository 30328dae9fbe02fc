from __future__ import annotations

"""Terminal implementation of the :class:`Prompter` protocol.

Used by ``run.py --console`` on machines without a display.
"""

from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO
import sys

from urn_catalog_toolkit.core.host.interfaces import FileFilters

__all__ = ["ConsolePrompter"]


class ConsolePrompter:
    """Numbered-menu prompts on stdin/stdout."""

    def __init__(self, input_func: Callable[[str], str] = input, out: Optional[TextIO] = None) -> None:
        self._input = input_func
        self._out = out or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self._out)

    def show_information(self, message: str, *buttons: str, modal: bool = False) -> Optional[str]:
        self._print(message)
        if not buttons:
            return None
        for number, label in enumerate(buttons, start=1):
            self._print(f"  {number}) {label}")
        try:
            answer = self._input("Choose an option (empty to cancel): ").strip()
        except EOFError:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(buttons):
            return buttons[int(answer) - 1]
        return None

    def show_error(self, message: str) -> None:
        self._print(f"ERROR: {message}")

    def pick_files(self, default_dir: Path, filters: FileFilters,
                   open_label: str = "Open") -> Sequence[Path]:
        allowed = {f".{ext.lower()}" for extensions in filters.values() for ext in extensions}
        try:
            answer = self._input(f"{open_label} (path relative to {default_dir}): ").strip()
        except EOFError:
            return []
        if not answer:
            return []
        path = Path(answer)
        if not path.is_absolute():
            path = Path(default_dir) / path
        if allowed and path.suffix.lower() not in allowed:
            self.show_error(f"Expected one of {', '.join(sorted(allowed))}: {path}")
            return []
        return [path]
