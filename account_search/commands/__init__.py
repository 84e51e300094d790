"""CLI subcommands.

Each public module in this package exposes its click command as ``cli``;
``discover_commands`` collects them for registration on the main group.
"""

from __future__ import annotations

import importlib
import pkgutil

import click


def discover_commands() -> list[click.Command]:
    """Import every public submodule and return its ``cli`` command.

    Modules without a ``cli`` command are ignored. Commands are returned in
    name order so ``--help`` lists them predictably.
    """
    commands: list[click.Command] = []
    for module_info in pkgutil.iter_modules(__path__):
        if module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{__name__}.{module_info.name}")
        command = getattr(module, "cli", None)
        if isinstance(command, click.Command):
            commands.append(command)
    return sorted(commands, key=lambda c: c.name or "")
