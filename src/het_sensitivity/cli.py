"""Command-line interface for theoretical het SNP sensitivity."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .config import SensitivityConfig, load_config
from .config_validator import ConfigValidator, validate_config_file
from .determinism import env_fingerprint
from .exceptions import HetSensitivityError
from .histogram import load_distribution
from .logging_config import get_logger, setup_logging, time_it
from .sensitivity import het_snp_sensitivity_details

logger = get_logger(__name__)


@dataclass(slots=True)
class CLIContext:
    """Shared CLI configuration."""

    config_override: Optional[Path]


def _load_config(config_option: Optional[Path]) -> SensitivityConfig:
    """Load the configuration file, or defaults when none is given."""
    if config_option is None:
        return SensitivityConfig()
    if not config_option.exists():
        raise click.ClickException(f"Configuration file not found: {config_option}")
    try:
        return load_config(config_option)
    except HetSensitivityError as exc:
        raise click.ClickException(f"Failed to load configuration {config_option}: {exc}") from exc


def _apply_overrides(config: SensitivityConfig, **overrides: Any) -> SensitivityConfig:
    """Replace config fields with CLI options that were given."""
    given = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **given)


@time_it("het SNP sensitivity")
def _run_sensitivity(depth_histogram: Path, quality_histogram: Path, config: SensitivityConfig):
    """Load both histograms and compute sensitivity with ``config``."""
    depth_distribution = load_distribution(depth_histogram)
    quality_distribution = load_distribution(quality_histogram)
    return het_snp_sensitivity_details(
        depth_distribution,
        quality_distribution,
        config.sample_size,
        config.log_odds_threshold,
        config.with_logging,
        config=config,
    )


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for progress messages.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to a YAML configuration file. Defaults to built-in settings.",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, config_path: Optional[Path]) -> None:
    """Theoretical sensitivity of heterozygous SNP calling from depth and quality histograms."""
    setup_logging(level=log_level)
    ctx.obj = CLIContext(config_override=config_path)


@main.command("compute")
@click.option(
    "--depth-histogram",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Two-column file: depth, number of sites.",
)
@click.option(
    "--quality-histogram",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Two-column file: base quality, number of bases.",
)
@click.option("--sample-size", type=int, help="Monte-Carlo trajectories per depth.")
@click.option("--log-odds", "log_odds_threshold", type=float, help="log10 likelihood ratio to call a SNP.")
@click.option("--seed", type=int, help="Base seed for the sampling streams.")
@click.option("--workers", "worker_count", type=int, help="Sampling threads.")
@click.option("--chunk-size", type=int, help="Trajectories per sampling task.")
@click.option("--quiet", is_flag=True, help="Do not report sampling progress.")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the JSON result to this file.",
)
@click.pass_obj
def compute_cmd(
    ctx: CLIContext,
    depth_histogram: Path,
    quality_histogram: Path,
    sample_size: Optional[int],
    log_odds_threshold: Optional[float],
    seed: Optional[int],
    worker_count: Optional[int],
    chunk_size: Optional[int],
    quiet: bool,
    output: Optional[Path],
) -> None:
    """Compute theoretical het SNP sensitivity."""
    config = _apply_overrides(
        _load_config(ctx.config_override),
        sample_size=sample_size,
        log_odds_threshold=log_odds_threshold,
        seed=seed,
        worker_count=worker_count,
        chunk_size=chunk_size,
        with_logging=False if quiet else None,
    )

    is_valid, errors, _ = ConfigValidator().validate_config(config.to_dict())
    if not is_valid:
        raise click.ClickException("Invalid configuration: " + "; ".join(errors))
    logger.debug("Effective configuration %s: %s", config.config_hash(), config.to_dict())

    try:
        result = _run_sensitivity(depth_histogram, quality_histogram, config)
    except HetSensitivityError as exc:
        raise click.ClickException(str(exc)) from exc

    payload: Dict[str, Any] = {
        "stage": "compute",
        **result.to_dict(),
        "inputs": {
            "depth_histogram": str(depth_histogram),
            "quality_histogram": str(quality_histogram),
        },
        "config": config.to_dict(),
        "config_hash": config.config_hash(),
        "environment": env_fingerprint(),
    }
    text = json.dumps(payload, indent=2)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
    click.echo(text)


@main.command("validate-config")
@click.argument("config_file", type=click.Path(path_type=Path))
@click.pass_context
def validate_config_cmd(ctx: click.Context, config_file: Path) -> None:
    """Check a YAML configuration file and report problems."""
    try:
        is_valid, errors, warnings = validate_config_file(config_file)
    except HetSensitivityError as exc:
        raise click.ClickException(str(exc)) from exc

    for error in errors:
        click.echo(f"ERROR: {error}")
    for warning in warnings:
        click.echo(f"WARNING: {warning}")

    if not is_valid:
        ctx.exit(1)
    click.echo(f"{config_file} is valid")


if __name__ == "__main__":  # pragma: no cover
    main()
