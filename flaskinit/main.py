"""
flaskinit — CLI entrypoint.

Usage:
    flaskinit --help
    flaskinit myapp -p About -p Contact
    flaskinit myapp -pt 9090 -ht 0.0.0.0 -prod
    flaskinit -avenv
    flaskinit -dvenv
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from flaskinit import __version__
from flaskinit.adapters.languages.python import PythonEnvAdapter
from flaskinit.adapters.mock import MockAdapter
from flaskinit.core.config.loader import ConfigError, load_defaults
from flaskinit.core.models.options import EnvironmentMode, OptionSet
from flaskinit.core.models.state import ActivationState
from flaskinit.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)
from flaskinit.core.services.activation import ActivationOutcome, handle_activation_request
from flaskinit.core.services.probe import is_affirmative
from flaskinit.core.use_cases.create import CreateResult, create_project

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class ScaffoldCommand(click.Command):
    """Command whose usage errors exit with status 1 instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _usage_error(ctx: click.Context, message: str) -> click.UsageError:
    err = click.UsageError(message, ctx)
    err.exit_code = 1
    return err


@click.command(cls=ScaffoldCommand, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="flaskinit")
@click.argument("project_dirs", nargs=-1, metavar="[PROJECT_DIR]")
@click.option("-dvenv", "deactivate", is_flag=True, help="Deactivate the virtual environment.")
@click.option("-avenv", "activate", is_flag=True, help="Activate ./venv if present.")
@click.option("-pt", "--port", type=click.IntRange(1, 65535), default=None,
              help="Default port of the generated app.")
@click.option("-ht", "--host", default=None, help="Default host of the generated app.")
@click.option("-prod", "production", is_flag=True, help="Default FLASK_ENV to production.")
@click.option("-p", "--page", "pages", multiple=True, metavar="NAME",
              help="Extra page to generate (repeat for more pages).")
@click.option("-y", "--yes", is_flag=True, help="Scaffold into a non-empty directory without asking.")
@click.option("--mock", is_flag=True, help="Skip real venv/pip commands (mock adapter).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to .flaskinit.yml (default: auto-detect).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(
    ctx: click.Context,
    project_dirs: tuple[str, ...],
    deactivate: bool,
    activate: bool,
    port: int | None,
    host: str | None,
    production: bool,
    pages: tuple[str, ...],
    yes: bool,
    mock: bool,
    as_json: bool,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """flaskinit — scaffold a Flask project with its own virtual environment.

    Creates PROJECT_DIR (if needed), a virtual environment with Flask
    installed, an app skeleton with one route, template and script per
    extra page, and a README describing the layout.

    Examples:

        flaskinit blog -p About -p Contact

        flaskinit shop -pt 9090 -ht 127.0.0.1 -prod

        flaskinit -dvenv
    """
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )

    if len(project_dirs) > 1:
        raise _usage_error(ctx, f"Only one project directory may be given, got {len(project_dirs)}.")

    try:
        defaults = load_defaults(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    try:
        options = OptionSet(
            project_dir=project_dirs[0] if project_dirs else None,
            host=host if host is not None else defaults.host,
            port=port if port is not None else defaults.port,
            environment_mode=EnvironmentMode.PRODUCTION if production else defaults.environment,
            deactivate=deactivate,
            activate=activate,
            pages=pages or tuple(defaults.pages),
        )
    except ValidationError as e:
        raise _usage_error(ctx, _first_validation_message(e)) from e

    if options.is_noop:
        click.echo(ctx.get_help())
        return

    if not options.project_dir:
        outcome = handle_activation_request(options, ActivationState.from_environ(), Path.cwd())
        outcome.state.apply(os.environ)
        _report_activation(outcome, as_json=as_json, quiet=quiet)
        return

    def confirm(prompt: str) -> bool:
        if yes:
            return True
        answer = click.prompt(f"{prompt} [y/N]", default="", show_default=False)
        return is_affirmative(answer)

    adapter = MockAdapter(adapter_name="python") if mock else PythonEnvAdapter()
    if not adapter.is_available():
        click.secho("❌ No Python interpreter found on PATH (tried python3, python).", fg="red")
        sys.exit(1)

    result = create_project(
        options,
        adapter=adapter,
        confirm=confirm,
        dependencies=defaults.dependencies,
    )
    if result.state is not None:
        result.state.apply(os.environ)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    _report_create(result, quiet=quiet, mock=mock)
    if not result.ok:
        sys.exit(1)


# ── Output ──────────────────────────────────────────────────────


def _report_activation(outcome: ActivationOutcome, *, as_json: bool, quiet: bool) -> None:
    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        return
    color = "green" if outcome.changed else "yellow"
    click.secho(f"{'✓' if outcome.changed else '⊘'} {outcome.message}", fg=color)
    if outcome.shell_command and not quiet:
        click.echo(f"   In your shell: {outcome.shell_command}")


def _report_create(result: CreateResult, *, quiet: bool, mock: bool) -> None:
    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        if result.provision and result.provision.activated_here and result.failed_step:
            click.echo("   The virtual environment activated by this run was deactivated.")
        return

    scaffold = result.scaffold
    assert scaffold is not None and result.project_root is not None

    mode_label = "[mock] " if mock else ""
    click.secho(f"\n✅ {mode_label}Project ready: {result.project_root}", fg="green", bold=True)
    if quiet:
        return

    if scaffold.pages:
        routes = ", ".join(f"/{p.ident}" for p in scaffold.pages)
        click.echo(f"   Pages: {routes}")
    click.echo(
        f"   Files: {len(scaffold.created)} created, "
        f"{len(scaffold.updated)} updated, {len(scaffold.skipped)} kept"
    )
    if result.activation:
        click.echo(f"   {result.activation.message}")
        if result.activation.shell_command:
            click.echo(f"   In your shell: {result.activation.shell_command}")
    click.echo(f"   Start the app: python {result.project_root / 'app' / 'app.py'}")
    click.echo()


def _first_validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


if __name__ == "__main__":
    cli()
