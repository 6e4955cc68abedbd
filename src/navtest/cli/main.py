"""CLI entry point for navtest."""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys
from typing import Optional, Tuple

import click
from colorama import init as colorama_init

from navtest import __version__, bootstrap
from navtest.config import REPORT_FORMATS, RunConfig, load_config
from navtest.core.tester import Tester
from navtest.drivers import driver_manager
from navtest.errors import NavtestError, NoSuitesProvided
from navtest.reporting.colorizer import Colorizer


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"navtest {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the navtest version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for navtest."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML config file.",
)
@click.option("--save", "save_path", type=str, help="Write the machine-readable report to this path.")
@click.option("--report-format", type=click.Choice(REPORT_FORMATS), help="Format of the saved report.")
@click.option("--pass-label", type=str, help="Status text printed for passing assertions.")
@click.option("--fail-label", type=str, help="Status text printed for failing assertions.")
@click.option("--poll-interval", type=click.FloatRange(min=0, min_open=True), help="Seconds between scheduler checks.")
@click.option("--driver", "driver_name", type=str, help="Registered driver to run suites against.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.option("--list", "list_only", is_flag=True, help="List discovered suite files without running.")
@click.pass_obj
def run(
    state: CliState,
    paths: Tuple[str, ...],
    config_path: Optional[str],
    save_path: Optional[str],
    report_format: Optional[str],
    pass_label: Optional[str],
    fail_label: Optional[str],
    poll_interval: Optional[float],
    driver_name: Optional[str],
    no_color: bool,
    list_only: bool,
) -> None:
    """Run every suite found under PATHS, one at a time."""

    try:
        config = load_config(config_path) if config_path else RunConfig()
        config = _apply_overrides(
            config,
            paths=paths,
            save=save_path,
            report_format=report_format,
            pass_label=pass_label,
            fail_label=fail_label,
            poll_interval=poll_interval,
            driver=driver_name,
            no_color=no_color,
        )
        if not config.paths:
            raise NoSuitesProvided("No test suite to run")
        if config.color:
            colorama_init()
        driver = driver_manager.create(
            config.driver,
            pages=config.pages,
            colorizer=Colorizer(use_color=config.color),
        )
        tester = Tester(driver, config.options)
        if list_only:
            for path in tester.scheduler.discover(*config.paths):
                click.echo(path)
            return
        asyncio.run(tester.run_suites(*config.paths))
    except (NavtestError, KeyError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _apply_overrides(
    config: RunConfig,
    *,
    paths: Tuple[str, ...],
    save: Optional[str],
    report_format: Optional[str],
    pass_label: Optional[str],
    fail_label: Optional[str],
    poll_interval: Optional[float],
    driver: Optional[str],
    no_color: bool,
) -> RunConfig:
    options = config.options
    if save and not report_format and save.lower().endswith(".json"):
        report_format = "json"
    option_changes = {
        key: value
        for key, value in {
            "save": save,
            "report_format": report_format,
            "pass_label": pass_label,
            "fail_label": fail_label,
            "poll_interval": poll_interval,
        }.items()
        if value is not None
    }
    if option_changes:
        options = dataclasses.replace(options, **option_changes)
    return dataclasses.replace(
        config,
        options=options,
        paths=tuple(paths) or tuple(config.paths),
        driver=driver or config.driver,
        color=config.color and not no_color,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="navtest", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
