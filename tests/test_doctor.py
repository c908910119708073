from functools import partial

from rich.console import Console
from typer.testing import CliRunner

import cli.doctor as cli_doctor
import cli.main as cli_main
from conftest import StubLedger, stub_connect
from core.config import write_user_env_vars
from core.domain.models import LAMPORTS_PER_SOL

runner = CliRunner()


def _isolate(env, tmp_path) -> None:
    env.chdir(tmp_path)
    # Consola ancha: las filas de la tabla no se parten.
    env.setattr(cli_doctor, "_console", Console(width=200))


def test_doctor_reports_missing_config_without_error_logs(clean_env, tmp_path) -> None:
    _isolate(clean_env, tmp_path)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "FAIL" in result.output
    assert "OPTIONAL" in result.output
    assert "SECRET_KEYPAIR_PATH" in result.output
    assert "ERROR" not in result.output


def test_doctor_checks_balance_when_config_is_complete(static_env, tmp_path) -> None:
    _isolate(static_env, tmp_path)
    ledger = StubLedger(balance=2 * LAMPORTS_PER_SOL)
    static_env.setattr(cli_doctor, "connect_ledger", stub_connect(ledger))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Static mode available" in result.output
    assert "2.0000 SOL" in result.output
    assert "FAIL" not in result.output
    assert ledger.endpoint == "https://api.devnet.solana.com"
    assert ledger.called("get_balance")
    assert not ledger.called("create_mint")


def test_doctor_flags_low_balance(static_env, tmp_path) -> None:
    _isolate(static_env, tmp_path)
    static_env.setattr(cli_doctor, "connect_ledger", stub_connect(StubLedger(balance=1_000)))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "FAIL" in result.output
    assert "0.1 SOL required" in result.output


def test_setup_pinata_stores_both_keys(clean_env, tmp_path) -> None:
    _isolate(clean_env, tmp_path)
    env_path = tmp_path / "cfg" / ".env"
    clean_env.setattr(cli_doctor, "write_user_env_vars", partial(write_user_env_vars, env_path=env_path))

    result = runner.invoke(cli_main.app, ["doctor", "setup-pinata"], input="key-123\nsecret-456\n")

    assert result.exit_code == 0, result.output
    text = env_path.read_text(encoding="utf-8")
    assert "PINATA_API_KEY=key-123" in text
    assert "PINATA_SECRET_API_KEY=secret-456" in text


def test_setup_pinata_rejects_blank_key(clean_env, tmp_path) -> None:
    _isolate(clean_env, tmp_path)
    env_path = tmp_path / "cfg" / ".env"
    clean_env.setattr(cli_doctor, "write_user_env_vars", partial(write_user_env_vars, env_path=env_path))

    result = runner.invoke(cli_main.app, ["doctor", "setup-pinata"], input=" \nsecret-456\n")

    assert result.exit_code != 0
    assert not env_path.exists()
