"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to commands via
``@click.pass_obj``. Builds the cluster client, HTTP probe, and logbook
lazily so ``--help`` and ``--version`` never touch kubectl or the log file,
and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kbcheck.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from kbcheck.config.settings import KbSettings
    from kbcheck.infrastructure.http import HttpProbe
    from kbcheck.infrastructure.kubectl import ClusterClient
    from kbcheck.infrastructure.logbook import Logbook
    from kbcheck.services.checklist import ChecklistService
    from kbcheck.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: KbSettings) -> None:
        self.settings = settings
        self._cluster: ClusterClient | None = None
        self._http: HttpProbe | None = None
        self._logbook: Logbook | None = None

        from kbcheck.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def mirror(self) -> bool:
        """Whether log lines are echoed live. Off when stdout is machine-read."""
        return not (self.settings.json_output or self.settings.quiet)

    @property
    def cluster(self) -> ClusterClient:
        if self._cluster is None:
            from kbcheck.infrastructure.kubectl import KubectlClient

            self._cluster = KubectlClient(self.settings.kubectl)
        return self._cluster

    @property
    def http(self) -> HttpProbe:
        if self._http is None:
            from kbcheck.infrastructure.http import HttpProbe

            self._http = HttpProbe(self.settings.http)
        return self._http

    @property
    def logbook(self) -> Logbook:
        if self._logbook is None:
            from kbcheck.infrastructure.logbook import Logbook

            self._logbook = Logbook(
                self.settings.log_path,
                echo=click.echo if self.mirror else None,
            )
        return self._logbook

    def checklist(self) -> ChecklistService:
        from kbcheck.services.checklist import ChecklistService

        return ChecklistService(
            self.cluster,
            self.http,
            self.logbook,
            checks=self.settings.checks,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
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
