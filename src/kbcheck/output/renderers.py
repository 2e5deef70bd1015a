"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from kbcheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from kbcheck.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render one line for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "failure_count" in result.data:
        return f"OK: {result.op} ({result.data['failure_count']} failures)"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="kb.ok"), Text(f"  {result.op}", style="kb.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    if not style and key.endswith("_file"):
        style = "kb.path"
    console.print(Text.assemble((f"  {key}: ", "kb.key"), (str(value), style)))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="kb.error"),
        Text(f"  {result.op}", style="kb.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Checklist ─────────────────────────────────────────────────────────


def _render_checklist(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """First-pass results as a table, then the summary failures."""
    _status_line(console, result)
    d = result.data

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Check", no_wrap=True)
    table.add_column("Result", no_wrap=True)
    table.add_column("Detail")
    for check in d.get("checks", []):
        outcome = Text("pass", style="kb.ok") if check.get("ok") else Text("fail", style="kb.fail")
        table.add_row(str(check.get("key", "")), outcome, str(check.get("message", "")))
    console.print(table)

    if verbose:
        for key in ("secret_name", "token", "ca_data"):
            if d.get(key):
                _field(console, key, d[key], style="kb.secret")

    failures = d.get("failures", [])
    if failures:
        console.print(f"\n[kb.fail]{len(failures)} failing[/kb.fail] in summary:")
        for failure in failures:
            console.print(Text(f"  - {failure}"))
    else:
        console.print("\n[kb.ok]All checks passed.[/kb.ok]")

    if d.get("log_file"):
        _field(console, "log_file", d["log_file"])


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "checklist": _render_checklist,
}
