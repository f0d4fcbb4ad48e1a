"""Rich/JSON output helpers.

The CLI renders ResponseEnvelope for humans (Rich output) or machines
(--json). The formatter layer adapts the envelope to the requested mode.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from datotools.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from datotools.services.result import ResponseEnvelope


@dataclass(frozen=True)
class OutputSettings:
    """Output switches taken from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(envelope: ResponseEnvelope, *, settings: OutputSettings | None = None) -> str:
    """Format an envelope for display.

    ``--json`` prints the wire payload; ``--quiet`` prints ids or a status
    line; otherwise Rich renders the payload.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return _json.dumps(envelope.to_payload(), indent=2, default=str)
    if settings.quiet:
        return render_quiet(envelope)
    return render_result(envelope, verbose=settings.verbose)
