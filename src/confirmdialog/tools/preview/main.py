"""Preview the confirmation dialog and validate its settings file."""

import logging
import sys
from pathlib import Path

import typer

from confirmdialog.config import SETTINGS_PATH, load_settings
from confirmdialog.errors import ConfigError

app = typer.Typer(
    help="Preview the confirmation dialog and check its settings",
    no_args_is_help=True,
)

# Module-level defaults for Typer arguments
_SETTINGS_HELP = "Path to a settings JSON file"
_NO_AJAX_HELP = "Show prompts as full-screen modals instead of inline panels"
_VERBOSE_HELP = "Log dialog activity to stderr"


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command()
def preview(
    settings_path: Path = typer.Option(  # noqa: B008
        SETTINGS_PATH,
        "--settings",
        "-s",
        help=_SETTINGS_HELP,
    ),
    no_ajax: bool = typer.Option(False, "--no-ajax", help=_NO_AJAX_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=_VERBOSE_HELP),
) -> None:
    """Launch the demo app with the given settings."""
    from confirmdialog.app import DemoApp

    _configure_logging(verbose)
    try:
        settings = load_settings(settings_path)
    except ConfigError as e:
        typer.echo(f"Error loading settings: {e}", err=True)
        sys.exit(1)
    if no_ajax:
        settings = settings.model_copy(update={"ajax": False})
    DemoApp(settings=settings).run()


@app.command("check-config")
def check_config(
    settings_path: Path = typer.Argument(  # noqa: B008
        ...,
        help=_SETTINGS_HELP,
    ),
) -> None:
    """Validate a settings file and print the effective values."""
    try:
        settings = load_settings(settings_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        sys.exit(1)

    problems = [
        f"{field} does not exist: {path}"
        for field, path in (
            ("layout_file", settings.layout_file),
            ("template_file", settings.template_file),
        )
        if path is not None and not path.is_file()
    ]

    typer.echo(f"ajax: {settings.ajax}")
    typer.echo(f"layout_file: {settings.layout_file or '(default)'}")
    typer.echo(f"template_file: {settings.template_file or '(default)'}")
    for problem in problems:
        typer.echo(f"Warning: {problem}", err=True)
    if problems:
        sys.exit(1)
    typer.echo("Settings OK")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
