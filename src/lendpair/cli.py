from pathlib import Path

import click
import tomlkit
from pydantic import TypeAdapter

from lendpair.config import PairConfig, dump_pair_config, load_pair_config
from lendpair.exceptions import LendPairError
from lendpair.rates import get_rate_calculator
from lendpair.version import __version__


def _load(config_path: Path) -> PairConfig:
    try:
        return load_pair_config(config_path)
    except LendPairError as exc:
        raise click.ClickException(exc.message or str(exc)) from exc


@click.group()
@click.version_option(version=__version__)
def cli() -> None: ...


@cli.group()
def config() -> None:
    """
    Pair configuration commands
    """


@config.command("show")
@click.argument(
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    type=str,
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    type=str,
    help="Show configuration in TOML format (default)",
    default=True,
)
def config_show(config_path: Path, output_format: str) -> None:
    """
    Validate a pair configuration file and display it in JSON or TOML (default) format, with
    defaults filled in.
    """

    pair_config = _load(config_path)

    match output_format:
        case "json":
            click.echo(
                TypeAdapter(dict).dump_json(
                    dump_pair_config(pair_config),
                    indent=2,
                ),
            )
        case "toml":
            click.echo(
                tomlkit.dumps(
                    dump_pair_config(pair_config),
                ),
            )
        case _:
            ...


@cli.group()
def rate() -> None:
    """
    Interest rate commands
    """


@rate.command("step")
@click.argument(
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--utilization",
    type=click.IntRange(min=0),
    required=True,
    help="Utilization at the rate module's precision",
)
@click.option(
    "--rate",
    "current_rate",
    type=click.IntRange(min=0),
    required=True,
    help="Current per-second rate, 18 decimal places",
)
@click.option(
    "--elapsed",
    type=click.IntRange(min=0),
    required=True,
    help="Seconds since the current rate was set",
)
def rate_step(config_path: Path, utilization: int, current_rate: int, elapsed: int) -> None:
    """
    Print the next per-second rate produced by the configured rate module.
    """

    pair_config = _load(config_path)
    calculator = get_rate_calculator(pair_config.rate)
    click.echo(
        calculator.update_rate(
            pair_config.rate,
            utilization=utilization,
            current_rate=current_rate,
            elapsed_time=elapsed,
        )
    )
