"""Feature extraction CLI commands."""

import json
import sys
from pathlib import Path
from typing import Optional

import click


def register_extract_commands(cli: click.Group) -> None:
    """Register feature extraction commands."""
    @cli.command("extract", help="Extract and select WEASEL features from a UCR file")
    @click.argument("data", type=click.Path(exists=True, path_type=Path))
    @click.option(
        "--config", "-c",
        type=click.Path(exists=True, path_type=Path),
        help="YAML configuration file",
    )
    @click.option(
        "--selector",
        type=click.Choice(["chi2", "anova", "none"]),
        help="Override the configured feature selector",
    )
    @click.option("--word-length", type=int, help="Number of SFA letters per word")
    @click.option(
        "--output", "-o",
        type=click.Path(path_type=Path),
        help="Write a JSON summary to this file instead of stdout",
    )
    def extract(
        data: Path,
        config: Optional[Path],
        selector: Optional[str],
        word_length: Optional[int],
        output: Optional[Path],
    ):
        """Build bags of bigrams for DATA and prune them.

        Examples:

        \b
            ts2bob extract Coffee_TRAIN.tsv
            ts2bob extract Coffee_TRAIN.tsv -c weasel.yaml --selector anova
        """
        from ts2bob.config import PipelineConfig, WeaselConfig
        from ts2bob.features import bags_to_csr
        from ts2bob.io import load_ucr
        from ts2bob.model import WEASEL

        try:
            if config is not None:
                cfg = PipelineConfig.from_yaml(config)
            else:
                cfg = PipelineConfig(weasel=WeaselConfig())
            if selector is not None:
                cfg.selection.method = selector
            cfg.logging.apply()

            samples = load_ucr(data)
            model = WEASEL.from_config(cfg.weasel)
            bags, result = model.fit_transform(
                samples,
                word_length=word_length or cfg.word_length,
                selection=cfg.selection,
            )
            X, y = bags_to_csr(bags, model.dict, grow=False)
        except Exception as e:
            click.echo(f"Extraction failed: {e}", err=True)
            sys.exit(1)

        summary = {
            "n_samples": len(samples),
            "n_classes": int(len(set(y.tolist()))),
            "n_features": int(X.shape[1]),
            "nnz": int(X.nnz),
            "selection": result.summary() if result is not None else None,
        }
        text = json.dumps(summary, indent=2)
        if output is not None:
            output.write_text(text)
            click.echo(f"Summary written to {output}")
        else:
            click.echo(text)
