"""Fixtures — settings."""

import pytest
from helpers import USER_ID

from lighthouse_bot.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        cw_key="test-key",
        cw_room_id="555",
        cw_user_id=USER_ID,
        spreadsheet_id="sheet-1",
    )  # type: ignore[call-arg]
