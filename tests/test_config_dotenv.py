from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from async_drain_queue import cli as cli_module
from async_drain_queue import config as queue_config
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    queue_config._reset_dotenv_state_for_testing()
    yield
    queue_config._reset_dotenv_state_for_testing()


def test_load_settings_defaults_when_unset() -> None:
    assert queue_config.load_settings({}).interval_ms == 250
    assert queue_config.load_settings({queue_config.INTERVAL_ENV_VAR: "  "}).interval_ms == 250


@pytest.mark.parametrize("raw, expected", [("50", 50), ("12.5", 12.5), (" 1000 ", 1000)])
def test_load_settings_parses_interval(raw: str, expected: float) -> None:
    settings = queue_config.load_settings({queue_config.INTERVAL_ENV_VAR: raw})

    assert settings.interval_ms == expected


@pytest.mark.parametrize(
    "raw, error_match",
    [
        ("fast", "number of milliseconds"),
        ("0", "must be positive"),
        ("-10", "must be positive"),
        ("inf", "must be finite"),
    ],
)
def test_load_settings_rejects_bad_interval(raw: str, error_match: str) -> None:
    with pytest.raises(ValueError, match=error_match):
        queue_config.load_settings({queue_config.INTERVAL_ENV_VAR: raw})


def test_load_settings_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(queue_config.INTERVAL_ENV_VAR, "75")

    assert queue_config.load_settings().interval_ms == 75


def test_settings_validate_on_construction() -> None:
    with pytest.raises(ValueError, match="must be positive"):
        queue_config.QueueSettings(interval_ms=0)


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "yes", True),
        (None, "off", False),
        (None, None, False),
    ],
)
def test_should_use_dotenv_precedence(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert queue_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_should_use_dotenv_rejects_garbage() -> None:
    with pytest.raises(ValueError, match=queue_config.DOTENV_ENV_VAR):
        queue_config.should_use_dotenv(env_value="sometimes")


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values without overriding call arguments."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text(f"{queue_config.INTERVAL_ENV_VAR}=40\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv(queue_config.INTERVAL_ENV_VAR, raising=False)

    loaded = queue_config.enable_dotenv()

    try:
        assert loaded == env_file.resolve()
        assert os.environ[queue_config.INTERVAL_ENV_VAR] == "40"
        assert queue_config.load_settings().interval_ms == 40
        assert queue_config.enable_dotenv() == loaded
    finally:
        os.environ.pop(queue_config.INTERVAL_ENV_VAR, None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text(f"{queue_config.INTERVAL_ENV_VAR}=40\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv(queue_config.INTERVAL_ENV_VAR, "90")

    result = queue_config.enable_dotenv()

    assert result is not None
    assert os.environ[queue_config.INTERVAL_ENV_VAR] == "90"


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(queue_config, "enable_dotenv", record_enable)
    monkeypatch.delenv(queue_config.DOTENV_ENV_VAR, raising=False)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {queue_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {queue_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []
