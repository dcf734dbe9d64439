"""Shared test fixtures for commandtree test suite."""

from pathlib import Path

import pytest

from commandtree.core.application import Application
from commandtree.core.events import EventDispatcher
from commandtree.core.tree import CommandRegistry
from commandtree.utils.config import Config


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    return Config(workspace=tmp_path)


@pytest.fixture
def registry() -> CommandRegistry:
    """Empty command registry."""
    return CommandRegistry()


@pytest.fixture
def dispatcher() -> EventDispatcher:
    """Dispatcher with one hook-pair and one notification event."""
    return EventDispatcher.declare(
        hook_pairs=["job:run"],
        notifications=["job:missing"],
        context="ctx",
    )


@pytest.fixture
def application() -> Application:
    """Application without configuration."""
    return Application()
