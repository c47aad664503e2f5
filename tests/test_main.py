"""Settings loading and entrypoint wiring tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from lighthouse_bot.config import Settings
from lighthouse_bot.main import main

REQUIRED_ENV = {
    "CW_KEY": "env-key",
    "CW_ROOM_ID": "101",
    "CW_USER_ID": "[To:1234]",
    "SPREADSHEET_ID": "sheet-env",
}


class TestSettings:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name, value in REQUIRED_ENV.items():
            monkeypatch.setenv(name, value)
        monkeypatch.setenv("AUDIT_TIMEOUT_MS", "60000")
        monkeypatch.setenv("NOTIFY_FAILURES", "false")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.cw_key == "env-key"
        assert settings.cw_room_id == "101"
        assert settings.cw_user_id == "[To:1234]"
        assert settings.spreadsheet_id == "sheet-env"
        assert settings.audit_timeout_ms == 60000
        assert settings.notify_failures is False

    def test_defaults(self, settings: Settings) -> None:
        assert settings.audit_url == "https://web.dev/measure/"
        assert settings.audit_timeout_ms == 180_000
        assert settings.credentials_path == "credentials.json"
        assert settings.worksheet_id == 0
        assert settings.self_unread is True

    def test_missing_required_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in REQUIRED_ENV:
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]


def _summary(ok: bool) -> MagicMock:
    summary = MagicMock()
    summary.ok = ok
    return summary


@pytest.mark.asyncio
@pytest.mark.parametrize(("ok", "exit_code"), [(True, 0), (False, 1)])
@patch("lighthouse_bot.main.setup_logging")
@patch("lighthouse_bot.main.run", new_callable=AsyncMock)
@patch("lighthouse_bot.main.ChromiumLauncher")
@patch("lighthouse_bot.main.ChatworkClient")
async def test_main_wires_components(mock_client_cls, mock_launcher_cls, mock_run, mock_setup_logging, settings, ok, exit_code):
    chat = AsyncMock()
    mock_client_cls.return_value.__aenter__.return_value = chat
    launcher = AsyncMock()
    mock_launcher_cls.return_value.__aenter__.return_value = launcher
    mock_run.return_value = _summary(ok)

    assert await main(settings) == exit_code

    mock_setup_logging.assert_called_once_with("INFO")
    mock_client_cls.assert_called_once_with(
        "test-key",
        "555",
        base_url="https://api.chatwork.com/v2",
        timeout=30.0,
    )
    mock_launcher_cls.assert_called_once_with(headless=True)
    run_args = mock_run.call_args.args
    assert run_args[0] is settings
    assert run_args[1] is chat
    assert run_args[3]._spreadsheet_id == "sheet-1"
    mock_client_cls.return_value.__aexit__.assert_awaited_once()
    mock_launcher_cls.return_value.__aexit__.assert_awaited_once()
