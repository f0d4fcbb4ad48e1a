"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides lazy Runtime initialization and centralized
envelope emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datotools.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from datotools.config.settings import DatoSettings
    from datotools.services.result import ResponseEnvelope
    from datotools.services.runtime import Runtime


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The runtime is built on first use so ``--help`` and ``--version``
    never import the catalogue or open HTTP clients.
    """

    def __init__(self, settings: DatoSettings) -> None:
        self.settings = settings
        self._runtime: Runtime | None = None

        from datotools.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from datotools.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def runtime(self) -> Runtime:
        """The dispatch runtime (created lazily on first access)."""
        if self._runtime is None:
            from datotools.services.runtime import build_runtime

            self._runtime = build_runtime(self.settings)
        return self._runtime

    def emit(self, envelope: ResponseEnvelope) -> None:
        """Format and output an envelope with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(envelope, settings=settings)
        if envelope.success:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
