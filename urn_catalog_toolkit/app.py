# -*- coding: utf-8 -*-
"""Launcher for the catalog generation command.

``run.py`` and the ``urn-catalog`` console script call :func:`main`. By
default the prompts are Tk dialogs over a withdrawn root window;
``--console`` uses the terminal instead.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from urn_catalog_toolkit import __version__
from urn_catalog_toolkit.config import ConfigManager
from urn_catalog_toolkit.core.exceptions import CatalogToolkitError
from urn_catalog_toolkit.core.host.interfaces import Prompter
from urn_catalog_toolkit.core.models import CatalogSettings, WorkspaceFolder
from urn_catalog_toolkit.core.services import build_catalog_command
from urn_catalog_toolkit.logging_config import setup_logging
from urn_catalog_toolkit.ui.console import ConsolePrompter

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "main", "run_command"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urn-catalog",
        description="Generate an XML catalog from Magento URNs and register it with the XML extension",
    )
    parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Magento project root (defaults to the current directory)",
    )
    parser.add_argument("--console", action="store_true", help="Prompt in the terminal instead of dialogs")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output to the console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_command(project: Path, prompter: Prompter, settings: Optional[CatalogSettings] = None) -> int:
    """Run the command for *project*; return a process exit code."""
    workspace = WorkspaceFolder(project.resolve())
    command = build_catalog_command(workspace, prompter, settings)
    try:
        result = command.run()
    except CatalogToolkitError as exc:
        logger.error("Catalog generation failed: %s", exc, exc_info=True)
        prompter.show_error(str(exc))
        return 1
    if result is not None:
        logger.info("Catalog ready: %s", result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    settings = CatalogSettings.from_config(ConfigManager().get_catalog_config())
    project = Path(args.project)

    if args.console:
        return run_command(project, ConsolePrompter(), settings)

    import tkinter as tk

    import sv_ttk

    from urn_catalog_toolkit.ui.dialogs import TkPrompter

    root = tk.Tk()
    root.withdraw()
    sv_ttk.set_theme("light")
    try:
        return run_command(project, TkPrompter(root), settings)
    finally:
        root.destroy()
        logging.info("===== Application terminated =====")
