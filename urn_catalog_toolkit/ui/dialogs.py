from __future__ import annotations

"""Tk implementation of the :class:`Prompter` protocol."""

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import List, Optional, Sequence

from urn_catalog_toolkit.core.host.interfaces import FileFilters

__all__ = ["ChoiceDialog", "TkPrompter"]

APP_TITLE = "URN Catalog Toolkit"


def _present_modal(dialog: tk.Toplevel, master: tk.Misc) -> None:
    """Put *dialog* on screen and grab input for it.

    A transient window inherits its master's state when first mapped, so a
    withdrawn master (the usual hidden root) is not used as the transient
    parent. The grab needs a viewable window.
    """
    master_window = master.winfo_toplevel()
    if master_window.state() != "withdrawn":
        dialog.transient(master_window)
    dialog.deiconify()
    dialog.lift()
    dialog.wait_visibility()
    dialog.grab_set()
    dialog.focus_set()


class ChoiceDialog(tk.Toplevel):
    """Modal message with one button per choice.

    show() returns the clicked button text, or None if the window was closed.
    """

    def __init__(self, master: tk.Misc, *, message: str, buttons: Sequence[str],
                 title: str = APP_TITLE, modal: bool = True) -> None:
        super().__init__(master)
        self.title(title)
        self.resizable(False, False)
        self._result: Optional[str] = None
        self._modal = modal

        self.columnconfigure(0, weight=1)
        ttk.Label(self, text=message, wraplength=420, justify="left").grid(
            row=0, column=0, sticky="w", padx=12, pady=(12, 8)
        )

        btns = ttk.Frame(self)
        btns.grid(row=1, column=0, sticky="e", padx=12, pady=(0, 12))
        choices: List[str] = list(buttons) or ["OK"]
        for col, label in enumerate(choices):
            ttk.Button(btns, text=label, command=lambda value=label: self._on_choice(value)).grid(
                row=0, column=col, padx=(0, 6)
            )
        if buttons:
            ttk.Button(btns, text="Cancel", command=self._on_cancel).grid(row=0, column=len(choices))

        self.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.bind("<Escape>", lambda _e: self._on_cancel())

    def _on_choice(self, value: str) -> None:
        self._result = value
        self.destroy()

    def _on_cancel(self) -> None:
        self._result = None
        self.destroy()

    def show(self) -> Optional[str]:
        if self._modal:
            _present_modal(self, self.master)
        else:
            self.lift()
        self.wait_window(self)
        return self._result


class TkPrompter:
    """Dialogs parented to a (usually withdrawn) Tk root."""

    def __init__(self, root: tk.Misc) -> None:
        self._root = root

    def show_information(self, message: str, *buttons: str, modal: bool = False) -> Optional[str]:
        if not buttons:
            messagebox.showinfo(APP_TITLE, message, parent=self._root)
            return None
        return ChoiceDialog(self._root, message=message, buttons=buttons, modal=modal).show()

    def show_error(self, message: str) -> None:
        messagebox.showerror(APP_TITLE, message, parent=self._root)

    def pick_files(self, default_dir: Path, filters: FileFilters,
                   open_label: str = "Open") -> Sequence[Path]:
        filetypes = [
            (label, " ".join(f"*.{ext}" for ext in extensions))
            for label, extensions in filters.items()
        ]
        chosen = filedialog.askopenfilename(
            parent=self._root,
            title=open_label,
            initialdir=str(default_dir),
            filetypes=filetypes,
        )
        return [Path(chosen)] if chosen else []
