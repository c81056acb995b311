"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from wingetctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from wingetctl.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode.

    Plans print one identifier per line; imports print the identifiers
    that failed (nothing when all succeeded).
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "import_plan":
        return "\n".join(item["id"] for item in result.data.get("items", []))
    if result.op == "import_packages":
        return "\n".join(result.data.get("failed", []))
    if result.op == "export_packages":
        return str(result.data.get("manifest_path", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="wg.ok")
    op = Text(f"  {result.op}", style="wg.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="wg.key")
    style = "wg.path" if key.endswith("_path") else ""
    console.print(k, Text(str(value), style=style), end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    if duration > 10_000:
        style = "bold red"
    elif duration > 1000:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>10.2f}ms[/{style}]  {span_data.get('name', '?')}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _package_table(items: list[dict[str, Any]], *, with_status: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Package", style="wg.id", no_wrap=True)
    table.add_column("Source", style="wg.source")
    if with_status:
        table.add_column("Status")
        table.add_column("Message", style="dim")
    else:
        table.add_column("Version", style="dim")

    for index, item in enumerate(items, start=1):
        row: list[Any] = [str(index), str(item.get("id", "")), str(item.get("source", ""))]
        if with_status:
            status = str(item.get("status", ""))
            row.append(Text(status, style=style_for_status(status)))
            row.append(str(item.get("message", "")))
        else:
            row.append(str(item.get("version") or ""))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="wg.error"), Text(f"  {result.op}", style="wg.op"), " — ", msg)

    if "log_path" in result.data:
        _field(console, "log_path", result.data["log_path"])

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("manifest_path", "non_managed_path", "log_path", "package_count"):
        if result.data.get(key) not in (None, ""):
            _field(console, key, result.data[key])
    if verbose:
        _field(console, "include_versions", result.data.get("include_versions", False))
        _render_meta(console, result)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(_package_table(d.get("items", []), with_status=False))
    dupes = d.get("total_records", 0) - d.get("count", 0)
    console.print(f"\n{d.get('count', 0)} packages would be installed ({dupes} duplicates dropped)")
    if verbose:
        _render_meta(console, result)


def _render_import(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if verbose:
        console.print(_package_table(d.get("items", []), with_status=True))
    _field(console, "installed", f"{d.get('installed', 0)}/{d.get('count', 0)}")
    failed = d.get("failed", [])
    if failed:
        _field(console, "failed", ", ".join(failed))
    _field(console, "log_path", d.get("log_path", ""))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "export_packages": _render_export,
    "import_plan": _render_plan,
    "import_packages": _render_import,
}
