"""AppContext: per-invocation wiring shared by the CLI.

Builds the services from the settings and centralizes result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from workon.output.formatters import OutputSettings, format_result
from workon.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from workon.config.settings import WorkonSettings
    from workon.plugins.manager import PluginManager
    from workon.services.launch import LaunchService
    from workon.services.resolve import ResolveService


class AppContext:
    """Settings plus lazily built services for one CLI invocation."""

    def __init__(self, settings: WorkonSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from workon.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with entry-point plugins loaded on first access."""
        if self._plugins is None:
            from workon.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def check_roots(self) -> None:
        """Exit with an error if no module roots are configured."""
        if self.settings.roots:
            return
        self.emit(
            ServiceResult.failure(
                "config",
                ErrorCode.CONFIG_MISSING,
                "no module roots configured: set WORKON_ROOTS, GOPATH, "
                "or 'roots' in the config file",
            )
        )

    def resolver(self) -> ResolveService:
        from workon.services.resolve import ResolveService

        return ResolveService(
            self.settings.roots,
            self.settings.resolver,
            plugins=self.plugins,
        )

    def launcher(self) -> LaunchService:
        from workon.infrastructure.i3 import I3Client
        from workon.services.launch import LaunchService
        from workon.services.workspace import WorkspaceService

        workspaces = WorkspaceService(
            I3Client(self.settings.workspace.ipc_command),
            plugins=self.plugins,
        )
        return LaunchService(
            self.resolver(),
            self.settings.launch,
            workspaces=workspaces,
            plugins=self.plugins,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr unless they are
          already part of the JSON payload.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
