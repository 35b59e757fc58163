"""Command line entry point.

``netsuite-client`` on its own runs a connection check and exits;
``netsuite-client shell`` starts an interactive prompt.
"""

import logging
import sys
from typing import Callable, Dict, List, Optional

import click

from .client import NetSuiteClient
from .config import load_config
from .exceptions import NetSuiteError
from .models import Customer, Transaction

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
PREVIEW_ROWS = 5
CREDENTIALS_HINT = "This is normal when using placeholder credentials"

HELP_TEXT = """
Available commands:
  help                   - Show this help message
  test                   - Test connection to NetSuite
  customers              - List customers (requires real credentials)
  transactions           - List recent transactions (requires real credentials)
  vendor_payments        - List vendor payments for May-Aug 2024 (requires real credentials)
  vendor_payments_custom - List vendor payments for custom date range (requires real credentials)
  quit                   - Exit the CLI
  exit                   - Exit the CLI
"""


class ConsoleHandler(logging.StreamHandler):
    """Stdout handler installed by :func:`configure_logging`."""

    def __init__(self):
        super().__init__(sys.stdout)
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def remove_console_handlers() -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, ConsoleHandler):
            root.removeHandler(handler)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stdout in a human readable format.

    Safe to call more than once; the handler installed by a previous
    call is replaced rather than duplicated.
    """
    remove_console_handlers()
    root = logging.getLogger()
    root.addHandler(ConsoleHandler())
    root.setLevel(level.upper())


def _build_client(config_dir: str) -> NetSuiteClient:
    try:
        config = load_config(config_dir)
        logger.info("Configuration loaded successfully")
        client = NetSuiteClient(config)
    except NetSuiteError as exc:
        logger.error("Failed to initialize NetSuite client: %s", exc)
        raise click.exceptions.Exit(1)
    logger.info("NetSuite client initialized")
    return client


def _echo_preview(lines: List[str]) -> None:
    for i, line in enumerate(lines[:PREVIEW_ROWS], start=1):
        click.echo(f"  {i}. {line}")
    if len(lines) > PREVIEW_ROWS:
        click.echo(f"  ... and {len(lines) - PREVIEW_ROWS} more")


def format_customer(customer: Customer) -> str:
    return f"{customer.entityid} ({customer.companyname or 'No company name'})"


def format_transaction(txn: Transaction) -> str:
    return (
        f"{txn.id} - {txn.transaction_type or 'Unknown'} - "
        f"${txn.amount or 0.0:.2f} ({txn.createddate or 'No date'})"
    )


def format_payment(txn: Transaction) -> str:
    return (
        f"{txn.id} - ${txn.amount or 0.0:.2f} - "
        f"{txn.memo or 'No memo'} ({txn.createddate or 'No date'})"
    )


class Shell:
    """Interactive read-eval loop over a :class:`NetSuiteClient`."""

    prompt = "netsuite"

    def __init__(self, client: NetSuiteClient):
        self.client = client
        self.commands: Dict[str, Callable[[], None]] = {
            "help": self.show_help,
            "test": self.test_connection,
            "customers": self.list_customers,
            "transactions": self.list_transactions,
            "vendor_payments": self.list_vendor_payments,
            "vendor_payments_custom": self.list_vendor_payments_custom,
        }

    def run(self) -> None:
        logger.info("NetSuite Python Client CLI")
        logger.info("Type 'help' for available commands, 'quit' to exit")

        while True:
            try:
                line = click.prompt(
                    self.prompt, prompt_suffix="> ", default="", show_default=False
                )
            except click.Abort:
                # EOF or Ctrl-C
                break
            if not self.handle(line):
                break

        logger.info("Goodbye!")

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the loop should stop."""
        command = line.strip()
        if not command:
            return True
        if command in ("quit", "exit"):
            return False

        action = self.commands.get(command)
        if action is None:
            logger.warning(
                "Unknown command: '%s'. Type 'help' for available commands.", command
            )
        else:
            action()
        return True

    def show_help(self) -> None:
        click.echo(HELP_TEXT)

    def test_connection(self) -> None:
        logger.info("Testing connection to NetSuite...")
        try:
            self.client.test_connection()
        except NetSuiteError as exc:
            logger.warning("Connection test failed: %s", exc)
            logger.info(CREDENTIALS_HINT)
            return
        logger.info("Successfully connected to NetSuite")

    def _list(self, what: str, fetch: Callable[[], list], fmt: Callable) -> None:
        try:
            records = fetch()
        except NetSuiteError as exc:
            logger.warning("Failed to fetch %s: %s", what, exc)
            logger.info(CREDENTIALS_HINT)
            return
        logger.info("Successfully fetched %d %s", len(records), what)
        _echo_preview([fmt(r) for r in records])

    def list_customers(self) -> None:
        logger.info("Fetching customers...")
        self._list("customers", lambda: self.client.get_customers(10), format_customer)

    def list_transactions(self) -> None:
        logger.info("Fetching recent transactions...")
        self._list(
            "transactions",
            lambda: self.client.get_transactions_with_filters([], 10),
            format_transaction,
        )

    def list_vendor_payments(self) -> None:
        logger.info("Fetching vendor payments for May-Aug 2024...")
        self._list(
            "vendor payments",
            lambda: self.client.get_vendor_payments_2024(20),
            format_payment,
        )

    def list_vendor_payments_custom(self, start_date: str = "2024-01-01",
                                    end_date: str = "2024-03-31") -> None:
        logger.info("Fetching vendor payments for custom date range...")
        logger.info("Date range: %s to %s", start_date, end_date)
        self._list(
            "vendor payments",
            lambda: self.client.get_vendor_payments(start_date, end_date, 20),
            format_payment,
        )


def run_basic_mode(client: NetSuiteClient) -> None:
    logger.info("Running in basic mode")
    try:
        client.test_connection()
    except NetSuiteError as exc:
        logger.error("Failed to connect to NetSuite: %s", exc)
        return
    logger.info("Successfully connected to NetSuite")


@click.group(invoke_without_command=True)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default="config",
    envvar="NETSUITE_CONFIG_DIR",
    help="Directory containing default.toml and local.toml",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    envvar="NETSUITE_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, config_dir: str, log_level: str):
    """NetSuite REST client.

    Without a subcommand, checks that NetSuite is reachable.
    """
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir

    logger.info("Starting NetSuite Python Client")
    if ctx.invoked_subcommand is None:
        with _build_client(config_dir) as client:
            run_basic_mode(client)


@cli.command()
@click.pass_context
def shell(ctx):
    """Start the interactive prompt."""
    with _build_client(ctx.obj["config_dir"]) as client:
        Shell(client).run()


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    cli(args=argv)
