"""Service test fixtures — scripted executor, runner and dispatch.

Invariants:
    - No test here spawns a real process: every command goes to FakeExecutor
    - Settings built without reading .env
"""

import pytest

from macmaint.config import Settings
from macmaint.services.handler_helpers import CommandRunner
from macmaint.services.tool_dispatch import ToolDispatch
from tests.services.fake_executor import FakeExecutor


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def runner(executor) -> CommandRunner:
    return CommandRunner(executor, timeout=5.0, cleanup_timeout=10.0)


@pytest.fixture
def dispatch(executor, env, settings) -> ToolDispatch:
    return ToolDispatch(executor, env, settings)
