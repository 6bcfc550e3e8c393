# filename : scripts.py
# created  : 10/19/2026


import logging

import click

from spremote.core.errors import SpRemoteError
from spremote.core.tcp import DEFAULT_PORT
from spremote.core.tcp.logging import configure as configure_logging

lg = logging.getLogger(__name__)


@click.command()
@click.option("-H", "--host", envvar="SPREMOTE_HOST", required=True, help="Terminal host.")
@click.option(
    "-p",
    "--port",
    envvar="SPREMOTE_PORT",
    type=int,
    default=DEFAULT_PORT,
    show_default=True,
    help="Terminal TCP port.",
)
@click.option(
    "-c",
    "--command",
    type=click.Choice(["status", "open", "close", "purchase", "refund"]),
    default="status",
    show_default=True,
    help="Operation to run.",
)
@click.option("--id", "transaction_id", default="0001", show_default=True, help="Transaction id (up to 4 digits).")
@click.option("--amount", default=None, help="Amount in minor currency units (up to 8 digits).")
@click.option("--supervisor", is_flag=True, help="Use the supervisor card (open/close).")
@click.option("--print-on-device", is_flag=True, help="Print the receipt on the terminal.")
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw frames).")
def spremote(host, port, command, transaction_id, amount, supervisor, print_on_device, verbose):

    configure_logging(verbose)

    from spremote.app.display import format_result
    from spremote.app.main import build_message, main

    try:
        message = build_message(command, transaction_id, amount, supervisor, print_on_device)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="'--amount'")

    try:
        result = main(host=host, port=port, message=message)
    except SpRemoteError as exc:
        raise click.ClickException(str(exc))

    click.echo(format_result(result))
    if not result.success:
        raise click.exceptions.Exit(1)
