"""Tests for the command line entry point and interactive shell."""

import logging
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from netsuite_client import cli as cli_module
from netsuite_client.cli import ConsoleHandler, Shell, cli, configure_logging
from netsuite_client.client import NetSuiteClient
from netsuite_client.config import ConnectionConfig
from netsuite_client.exceptions import NetSuiteAPIError, NetSuiteConfigError
from netsuite_client.models import Customer, EntityReference, Transaction


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def fake_client():
    client = MagicMock(spec=NetSuiteClient)
    client.__enter__.return_value = client
    client.get_customers.return_value = []
    client.get_transactions_with_filters.return_value = []
    client.get_vendor_payments.return_value = []
    client.get_vendor_payments_2024.return_value = []
    return client


@pytest.fixture
def patched_client(monkeypatch, fake_client):
    """Make the CLI build ``fake_client`` instead of a real one."""
    monkeypatch.setattr(cli_module, "load_config", lambda config_dir: ConnectionConfig())
    monkeypatch.setattr(cli_module, "NetSuiteClient", lambda config: fake_client)
    return fake_client


@pytest.fixture
def shell(fake_client):
    return Shell(fake_client)


# ---------------------------------------------------------------------------
# Shell command dispatch
# ---------------------------------------------------------------------------


def test_help_lists_commands(shell, capsys):
    assert shell.handle("help") is True
    out = capsys.readouterr().out
    for command in ("test", "customers", "transactions", "vendor_payments_custom", "quit"):
        assert command in out


@pytest.mark.parametrize("line", ["quit", "exit", "  exit  "])
def test_quit_stops_loop(shell, line):
    assert shell.handle(line) is False


def test_blank_input_is_ignored(shell, fake_client, capsys):
    assert shell.handle("   ") is True
    assert capsys.readouterr().out == ""
    assert fake_client.method_calls == []


def test_unknown_command_warns(shell, caplog):
    with caplog.at_level(logging.WARNING):
        assert shell.handle("delete everything") is True
    assert "Unknown command: 'delete everything'" in caplog.text


def test_test_command(shell, fake_client, caplog):
    with caplog.at_level(logging.INFO):
        shell.handle("test")
    fake_client.test_connection.assert_called_once_with()
    assert "Successfully connected" in caplog.text


def test_test_command_failure_keeps_running(shell, fake_client, caplog):
    fake_client.test_connection.side_effect = NetSuiteAPIError("HTTP 500", 500)
    with caplog.at_level(logging.INFO):
        assert shell.handle("test") is True
    assert "Connection test failed" in caplog.text
    assert "placeholder credentials" in caplog.text


def test_customers_preview(shell, fake_client, capsys):
    fake_client.get_customers.return_value = [
        Customer(id=str(i), entityid=f"CUST-{i}", companyname=None if i == 1 else f"Co {i}")
        for i in range(1, 8)
    ]

    shell.handle("customers")

    fake_client.get_customers.assert_called_once_with(10)
    out = capsys.readouterr().out
    assert "  1. CUST-1 (No company name)" in out
    assert "  5. CUST-5 (Co 5)" in out
    assert "CUST-6" not in out
    assert "  ... and 2 more" in out


def test_customers_failure(shell, fake_client, caplog):
    fake_client.get_customers.side_effect = NetSuiteAPIError("HTTP 401", 401)
    with caplog.at_level(logging.WARNING):
        assert shell.handle("customers") is True
    assert "Failed to fetch customers" in caplog.text


def test_transactions_command(shell, fake_client, capsys):
    fake_client.get_transactions_with_filters.return_value = [
        Transaction(id="9", transaction_type="Check", amount=12.5, createddate="2024-02-02"),
    ]
    shell.handle("transactions")
    fake_client.get_transactions_with_filters.assert_called_once_with([], 10)
    assert "  1. 9 - Check - $12.50 (2024-02-02)" in capsys.readouterr().out


def test_vendor_payments_command(shell, fake_client, capsys):
    fake_client.get_vendor_payments_2024.return_value = [
        Transaction(id="3", entity=EntityReference(id="7")),
    ]
    shell.handle("vendor_payments")
    fake_client.get_vendor_payments_2024.assert_called_once_with(20)
    assert "  1. 3 - $0.00 - No memo (No date)" in capsys.readouterr().out


def test_vendor_payments_custom_command(shell, fake_client):
    shell.handle("vendor_payments_custom")
    fake_client.get_vendor_payments.assert_called_once_with("2024-01-01", "2024-03-31", 20)


# ---------------------------------------------------------------------------
# Click entry point
# ---------------------------------------------------------------------------


def test_basic_mode_checks_connection(cli_runner, patched_client):
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    patched_client.test_connection.assert_called_once_with()
    patched_client.__exit__.assert_called_once()


def test_basic_mode_connection_failure_is_not_fatal(cli_runner, patched_client):
    patched_client.test_connection.side_effect = NetSuiteAPIError("HTTP 503", 503)
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0


def test_config_error_exits_with_status_1(cli_runner, monkeypatch):
    def broken(config_dir):
        raise NetSuiteConfigError("bad toml")

    monkeypatch.setattr(cli_module, "load_config", broken)
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 1


def test_invalid_base_url_exits_with_status_1(cli_runner, monkeypatch):
    monkeypatch.setattr(
        cli_module, "load_config", lambda config_dir: ConnectionConfig(base_url="nope")
    )
    result = cli_runner.invoke(cli, ["shell"], input="quit\n")
    assert result.exit_code == 1


def test_shell_session(cli_runner, patched_client):
    result = cli_runner.invoke(cli, ["shell"], input="help\n\nbogus\ncustomers\nquit\n")

    assert result.exit_code == 0
    assert "Available commands" in result.output
    assert "netsuite> " in result.output
    patched_client.get_customers.assert_called_once_with(10)


def test_shell_exits_on_eof(cli_runner, patched_client):
    result = cli_runner.invoke(cli, ["shell"], input="test\n")
    assert result.exit_code == 0
    patched_client.test_connection.assert_called_once_with()


def test_config_dir_option_is_passed_through(cli_runner, monkeypatch, fake_client, tmp_path):
    seen = []

    def fake_load(config_dir):
        seen.append(config_dir)
        return ConnectionConfig()

    monkeypatch.setattr(cli_module, "load_config", fake_load)
    monkeypatch.setattr(cli_module, "NetSuiteClient", lambda config: fake_client)

    result = cli_runner.invoke(cli, ["--config-dir", str(tmp_path), "--log-level", "debug"])

    assert result.exit_code == 0
    assert seen == [str(tmp_path)]


def test_configure_logging_replaces_its_handler():
    configure_logging("INFO")
    configure_logging("DEBUG")

    root = logging.getLogger()
    handlers = [h for h in root.handlers if isinstance(h, ConsoleHandler)]
    assert len(handlers) == 1
    assert root.level == logging.DEBUG
