"""Shared pytest fixtures for evalo tests."""

from unittest.mock import MagicMock

import pytest

from evalo.ui.command_palette.palette_commands import (
    DEFAULT_COMMANDS,
    CommandRegistry,
    UserInfo,
)
from evalo.ui.command_palette.palette_presenter import PalettePresenter

SCENARIO_IDS = [
    "home",
    "dashboard",
    "create-test",
    "manage-users",
    "upload-books",
    "logout",
    "toggle-copy",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/evalo."""
    config_path = tmp_path / "ui_config.json"
    monkeypatch.setenv("EVALO_CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(
        "evalo.config.ui_config.get_ui_config_path",
        lambda: config_path,
    )
    return config_path


@pytest.fixture
def scenario_registry():
    """The seven-command registry: the defaults without "My Profile"."""
    return CommandRegistry(c for c in DEFAULT_COMMANDS if c.id in SCENARIO_IDS)


@pytest.fixture
def context():
    """A capability context that records every call."""
    ctx = MagicMock()
    ctx.user = UserInfo(role="student")
    return ctx


@pytest.fixture
def dismissed():
    return MagicMock()


@pytest.fixture
def presenter(context, scenario_registry, dismissed):
    return PalettePresenter(context, registry=scenario_registry, on_dismiss=dismissed)
