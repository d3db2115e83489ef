"""The workon command: resolve a module pattern and start working on it."""

from __future__ import annotations

from typing import Any

import click

from workon import __version__
from workon.config.settings import WorkonSettings
from workon.context import AppContext

EXAMPLES = """\
  workon github.com/perillo/i3workon
  workon ...i3workon
  workon -w 3 example.com/tools/...
  workon -w auto --editor code example.com/api
  workon --list 'github.com/perillo/...'
  workon --json --list ..."""


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class WorkonCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class WorkspaceParam(click.ParamType):
    """A workspace number (0 disables switching) or ``auto``."""

    name = "N|auto"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, int) or value == "auto":
            return value
        try:
            number = int(value)
        except ValueError:
            self.fail(f"{value!r} is not a workspace number or 'auto'", param, ctx)
        if number < 0:
            self.fail(f"{value!r} is negative", param, ctx)
        return number


@click.command(cls=WorkonCommand, examples=EXAMPLES)
@click.version_option(version=__version__, prog_name="workon")
@click.argument("pattern")
@click.option(
    "-w",
    "--workspace",
    type=WorkspaceParam(),
    default=None,
    help="Workspace to switch to, or 'auto' for the next free one.",
)
@click.option("--terminal", default=None, help="Terminal to start (overrides config).")
@click.option("--editor", default=None, help="Editor to start (overrides config).")
@click.option("--list", "list_only", is_flag=True, help="List matching modules; launch nothing.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Override config file path.",
)
def cli(
    pattern: str,
    workspace: int | str | None,
    terminal: str | None,
    editor: str | None,
    list_only: bool,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Open a terminal and an editor on the Go module matching PATTERN.

    PATTERN is a module path in which '...' matches any string, including
    slashes.  It must match exactly one module under the configured roots.
    """
    settings = WorkonSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    overrides = {k: v for k, v in (("terminal", terminal), ("editor", editor)) if v}
    if overrides:
        settings = settings.model_copy(
            update={"launch": settings.launch.model_copy(update=overrides)}
        )

    app = AppContext(settings)
    app.check_roots()
    if list_only:
        app.emit(app.resolver().match(pattern))
    else:
        app.emit(app.launcher().workon(pattern, workspace=workspace))
