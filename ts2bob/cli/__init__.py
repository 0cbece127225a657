"""
Command-line interface for ts2bob.

This module provides the main entry point for the ts2bob CLI.
"""

import click
import importlib
import pkgutil
from pathlib import Path


# Create the main Click group
@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="ts2bob")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """WEASEL bag-of-bigrams feature extraction."""
    ctx.ensure_object(dict)


# Dynamically load all command modules
def register_commands() -> None:
    """Dynamically discover and register all command modules."""
    commands_pkg = Path(__file__).parent / "commands"

    for _, module_name, _ in pkgutil.iter_modules([str(commands_pkg)]):
        module = importlib.import_module(f"ts2bob.cli.commands.{module_name}")

        # Look for register_*_commands functions and call them
        for name, func in module.__dict__.items():
            if name.startswith("register_") and name.endswith("_commands"):
                func(cli)


register_commands()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
