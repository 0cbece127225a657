"""Configuration CLI commands."""

import sys
from pathlib import Path

import click


def register_config_commands(cli: click.Group) -> None:
    """Register configuration-related commands."""
    @cli.command("validate", help="Validate a YAML configuration file")
    @click.argument("config", type=click.Path(exists=True, path_type=Path))
    def validate(config: Path):
        """Check CONFIG and print the resolved settings."""
        from ts2bob.config import PipelineConfig
        from ts2bob.core.encoding import key_bits

        try:
            cfg = PipelineConfig.from_yaml(config)
        except Exception as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)

        weasel = cfg.weasel
        click.echo(f"Configuration valid: {config}")
        click.echo(f"  Window lengths: {', '.join(str(w) for w in weasel.window_lengths)}")
        click.echo(f"  Word length: {weasel.max_word_length}, alphabet: {weasel.alphabet_size}")
        click.echo(f"  Key bits: {key_bits(weasel.alphabet_size, weasel.max_word_length)}")
        click.echo(f"  Selector: {cfg.selection.method}")
