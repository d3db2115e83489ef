"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`;
unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from workon.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from workon.services.result import ServiceResult


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
    """Render minimal, script-friendly output for ``--quiet`` mode.

    A resolved module prints its directory; a listing prints one identity
    per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("identity", "")) for item in items)

    module = result.data.get("module")
    if isinstance(module, dict):
        return str(module.get("directory", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="workon.ok")
    op = Text(f"  {result.op}", style="workon.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="workon.key")
    if key == "identity":
        v = Text(str(value), style="workon.identity")
    elif key in ("directory", "manifest_path", "root_dir"):
        v = Text(str(value), style="workon.path")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _module_fields(console: Console, module: dict[str, Any], *, verbose: bool) -> None:
    keys = ["identity", "directory", "toolchain_version"]
    if verbose:
        keys += ["manifest_path", "root_dir"]
    for key in keys:
        if key in module:
            _field(console, key, module[key])


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="workon.error"), Text(f"  {result.op}", style="workon.op"))
    console.print(f"  {msg}", markup=False)
    if err is None:
        return

    # Candidates are always shown: the user needs them to pick a narrower pattern.
    for identity in err.detail.get("matches", []):
        console.print(Text(f"    {identity}", style="workon.identity"))
    for rejected in err.detail.get("rejected", []):
        console.print(Text(f"    {rejected.get('message', '')}", style="workon.rejected"))

    if verbose:
        for k, v in err.detail.items():
            if k not in ("matches", "rejected"):
                console.print(f"  {k}: {v}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _module_fields(console, result.data.get("module", {}), verbose=verbose)


def _render_match(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Module", style="workon.identity", no_wrap=True)
    table.add_column("Go", justify="right")
    table.add_column("Directory", style="workon.path")
    for item in items:
        table.add_row(
            Text(str(item.get("identity", ""))),
            Text(str(item.get("toolchain_version", ""))),
            Text(str(item.get("directory", ""))),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} modules")

    rejected = result.data.get("rejected", [])
    if rejected:
        console.print(f"{len(rejected)} rejected")
        for item in rejected:
            console.print(Text(f"  {item.get('message', '')}", style="workon.rejected"))


def _render_workon(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _module_fields(console, result.data.get("module", {}), verbose=verbose)
    if result.data.get("workspace"):
        _field(console, "workspace", result.data["workspace"])
    _field(console, "terminal", result.data.get("terminal", ""))
    _field(console, "editor", result.data.get("editor", ""))
    files = result.data.get("files", [])
    _field(console, "files", len(files))
    if verbose:
        for path in files:
            console.print(f"    {path}", markup=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS = {
    "resolve": _render_resolve,
    "match": _render_match,
    "workon": _render_workon,
}
