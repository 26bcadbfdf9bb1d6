"""Common CLI options for the CLI."""

import typer

from hbasecheck.core.endpoint import DEFAULT_PORT

DEFAULT_TIMEOUT = 20

HostOpt = typer.Option(
    None,
    "--host",
    "-H",
    envvar="HBASE_THRIFT_HOST",
    help="HBase Thrift server address to connect to",
    show_default=False,
)

PortOpt = typer.Option(
    str(DEFAULT_PORT),
    "--port",
    "-P",
    envvar="HBASE_THRIFT_PORT",
    help="HBase Thrift server port to connect to",
)

TablesOpt = typer.Option(
    None,
    "--tables",
    "-T",
    envvar="HBASE_CHECK_TABLES",
    help=(
        "Table(s) to check, comma separated. This should be a list of user "
        "tables, not -ROOT- or .META. catalog tables which are checked additionally"
    ),
    show_default=False,
)

TimeoutOpt = typer.Option(
    str(DEFAULT_TIMEOUT),
    "--timeout",
    "-t",
    envvar="HBASE_CHECK_TIMEOUT",
    help=(
        "Timeout in seconds for the whole check. Longer than usual because the "
        "Thrift server takes ~10 secs to fail when no regionservers are online"
    ),
)

VerboseOpt = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Verbose mode, repeat for more detail (-vvv max)",
)
