# sensornode/sensornodectl.py
"""sensornodectl: decode node payloads from the command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typer import Context
from typing_extensions import Annotated

from .const import DEFAULT_OUTPUT_TYPE, OUTPUT_TYPE_ENVVAR, OutputType
from .device import BaseDecodeTable, get_decode_table, list_families
from .exception import UnknownFamilyError
from .protocol import decode, decode_records
from .records import ParameterRecord
from .uplinks import dumps, iter_uplinks, write_jsonl

app = typer.Typer(help="LoRaWAN sensor node payload decoder")
uplinks_app = typer.Typer(help="Decode network-server uplink exports (JSON array or NDJSON)")
app.add_typer(uplinks_app, name="uplinks")

console = Console()

# ────────────────────────────────────────────────────────────────
# Global options (e.g., --debug)
# ────────────────────────────────────────────────────────────────

@app.callback(invoke_without_command=True)
def _global_options(
    ctx: Context,
    debug: Annotated[
        bool,
        typer.Option("--debug/--no-debug", help="Enable verbose debug logging"),
    ] = False,
):
    """Global options for all subcommands."""
    ctx.obj = ctx.obj or {}
    ctx.obj["debug"] = bool(debug)

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_level=True)],
        )
        logging.getLogger("sensornode").setLevel(logging.DEBUG)

# ────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────

def _parse_hex_blob(blob: str) -> bytes:
    s = "".join(blob.strip().split())
    if s.lower().startswith("0x"):
        s = s[2:]
    if len(s) % 2 != 0:
        raise typer.BadParameter("Hex length must be even.")
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise typer.BadParameter("Invalid hex characters in payload.") from e


def _resolve_family(name: str) -> BaseDecodeTable:
    try:
        return get_decode_table(name)
    except UnknownFamilyError as e:
        raise typer.BadParameter(str(e)) from e


def _records_table(records: List[ParameterRecord]) -> Table:
    table = Table("label", "channel", "value", "unit", "source")
    for rec in records:
        value = rec.value.hex(" ").upper() if isinstance(rec.value, bytes) else str(rec.value)
        table.add_row(rec.label, str(rec.channel), value, rec.unit or "", rec.source or "")
    return table

# ────────────────────────────────────────────────────────────────
# sensornodectl families
# ────────────────────────────────────────────────────────────────

@app.command("families")
def families() -> None:
    """List the registered decode tables."""
    table = Table("name", "models", "byte order", "description")
    for cls in list_families():
        table.add_row(cls.model_name, ", ".join(cls.model_codes), cls.byteorder, cls.description)
    console.print(table)

# ────────────────────────────────────────────────────────────────
# sensornodectl decode <family> <port> <hex>
# ────────────────────────────────────────────────────────────────

@app.command("decode")
def decode_payload(
    family: Annotated[str, typer.Argument(help="Decode table name or model code (see `families`)")],
    port: Annotated[int, typer.Argument(help="LoRaWAN fPort", min=0, max=255)],
    payload: Annotated[str, typer.Argument(help="Payload bytes as hex, e.g. '0A00000070F4'")],
    output_type: Annotated[
        OutputType,
        typer.Option("--output-type", "-t", envvar=OUTPUT_TYPE_ENVVAR, help="Output projection"),
    ] = DEFAULT_OUTPUT_TYPE,
    as_table: Annotated[bool, typer.Option("--table/--json", help="Show records as a table")] = False,
) -> None:
    """Decode a single payload and print the result."""
    table = _resolve_family(family)
    data = _parse_hex_blob(payload)
    if as_table:
        console.print(_records_table(decode_records(table, data, port)))
        return
    result = decode(port, data, family=table, output_type=output_type)
    typer.echo(dumps(result, pretty=True))

# ────────────────────────────────────────────────────────────────
# sensornodectl uplinks decode <file> --family <name>
# ────────────────────────────────────────────────────────────────

@uplinks_app.command("decode")
def uplinks_decode(
    infile: Annotated[Path, typer.Argument(exists=True, readable=True, help="Uplink export (JSON array or NDJSON)")],
    family: Annotated[str, typer.Option("--family", "-f", help="Decode table name or model code")],
    outfile: Annotated[Path, typer.Option("--out", "-o", help="Output JSONL path (use '-' for stdout)")] = Path("-"),
    output_type: Annotated[
        OutputType,
        typer.Option("--output-type", "-t", envvar=OUTPUT_TYPE_ENVVAR, help="Output projection"),
    ] = DEFAULT_OUTPUT_TYPE,
    pretty: Annotated[bool, typer.Option("--pretty/--no-pretty", help="Pretty JSONL (indented)")] = False,
) -> None:
    """Decode every uplink in an export into JSON Lines."""
    table = _resolve_family(family)

    def _rows(stream: Iterator[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        for up in stream:
            row: Dict[str, Any] = {k: up[k] for k in ("ts", "dev_eui", "f_port")}
            row["decoded"] = decode(
                up["f_port"], bytes.fromhex(up["bytes_hex"]), family=table, output_type=output_type
            )
            yield row

    try:
        with infile.open("r", encoding="utf-8") as f:
            rows = _rows(iter_uplinks(f))
            if str(outfile) == "-":
                n = write_jsonl(rows, sys.stdout, pretty=pretty)
            else:
                outfile.parent.mkdir(parents=True, exist_ok=True)
                with outfile.open("w", encoding="utf-8") as out:
                    n = write_jsonl(rows, out, pretty=pretty)
    except ValueError as e:
        raise typer.BadParameter(f"Decode failed: {e}") from e
    typer.secho(f"decoded {n} uplink(s)", fg=typer.colors.GREEN, err=True)

# ────────────────────────────────────────────────────────────────
# sensornodectl uplinks peek <file>
# ────────────────────────────────────────────────────────────────

@uplinks_app.command("peek")
def uplinks_peek(
    infile: Annotated[Path, typer.Argument(exists=True, readable=True, help="Uplink export (JSON array or NDJSON)")],
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of uplinks to show", min=1)] = 12,
) -> None:
    """Show the first few normalized uplinks (ts, dev_eui, port, len, hex)."""
    table = Table("idx", "time", "dev_eui", "port", "len", "hex")
    try:
        with infile.open("r", encoding="utf-8") as f:
            for idx, up in enumerate(iter_uplinks(f)):
                if idx >= limit:
                    break
                hx = up["bytes_hex"]
                table.add_row(
                    str(idx), str(up["ts"] or ""), str(up["dev_eui"] or ""),
                    str(up["f_port"]), str(up["len"]), hx if len(hx) <= 48 else hx[:48] + "…",
                )
    except ValueError as e:
        raise typer.BadParameter(f"Peek failed: {e}") from e
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
