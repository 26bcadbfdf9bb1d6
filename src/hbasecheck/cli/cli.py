"""CLI application for checking HBase tables via the Thrift server."""

from importlib.metadata import PackageNotFoundError, version

import typer

from hbasecheck.cli.common.context import ProbeContext, build_probe_context
from hbasecheck.cli.common.exits import (
    exit_from_exc,
    status_exit,
    unexpected_exit,
    usage_exit,
)
from hbasecheck.cli.common.options import (
    HostOpt,
    PortOpt,
    TablesOpt,
    TimeoutOpt,
    VerboseOpt,
)
from hbasecheck.cli.common.output import out
from hbasecheck.cli.common.timeout import deadline, validate_timeout
from hbasecheck.core.checks import check_tables
from hbasecheck.core.endpoint import validate_host, validate_port
from hbasecheck.core.errors import ProbeError
from hbasecheck.core.report import render_message
from hbasecheck.core.results import CheckResults
from hbasecheck.core.tables import parse_table_list

DESCRIPTION = """\
Check given HBase table(s) via the HBase Thrift Server API.

Checks:

1. Table exists
2. Table is enabled
3. Table has columns
4. Table's regions are all assigned to regionservers

The -ROOT- and .META. catalog tables are always checked as well, but only for
being enabled and having columns, since the Thrift API exposes no region
details for them.
"""

app = typer.Typer(
    help=DESCRIPTION,
    add_completion=False,
    no_args_is_help=False,
)


def _version() -> str:
    try:
        return version("check-hbase-tables")
    except PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"check_hbase_tables {_version()}")
        raise typer.Exit(0)


def _report_details(ctx: ProbeContext, results: CheckResults) -> None:
    """Print per-table diagnostics on stderr according to verbosity."""
    out.header(3, "found HBase tables:")
    out.names(3, results.cluster_tables)
    for detail in results.details.values():
        out.vlog(
            2,
            f"table '{detail.table}': enabled={detail.enabled} "
            f"columns={','.join(detail.column_families)} "
            f"regions={detail.region_count} "
            f"regionservers={','.join(detail.regionservers)}",
        )
        for region in detail.unassigned_regions:
            out.vlog(
                2,
                f"table '{detail.table}' region '{region}' is unassigned "
                "to any regionserver!",
            )
    out.table_details(1, results.details.values(), title=f"HBase tables on {ctx.host}")


@app.command()
def check(
    host: str | None = HostOpt,
    port: str = PortOpt,
    tables: str | None = TablesOpt,
    timeout: str = TimeoutOpt,
    verbose: int = VerboseOpt,
    show_version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Check HBase table(s) and print a single status line.

    Exit code: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN.
    """
    out.verbosity = verbose

    try:
        valid_host = validate_host(host)
        valid_port = validate_port(port)
        table_names = parse_table_list(tables)
        seconds = validate_timeout(timeout)
    except ValueError as e:
        usage_exit(str(e))

    out.kv(
        1,
        {
            "host": valid_host,
            "port": valid_port,
            "tables": "[ " + " , ".join(table_names) + " ]",
            "timeout": f"{seconds} secs",
        },
    )

    ctx = build_probe_context(valid_host, valid_port, table_names, seconds)

    try:
        with deadline(seconds):
            ctx.adapter.open()
            results = check_tables(ctx.adapter, ctx.tables)
        _report_details(ctx, results)
        ctx.adapter.close()
    except ProbeError as e:
        exit_from_exc(e)
    except Exception as e:  # noqa: BLE001
        unexpected_exit(e)

    status_exit(results.status, render_message(results))


if __name__ == "__main__":
    app()
