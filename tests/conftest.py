"""Root conftest — shared test configuration."""

import os
from pathlib import Path

import pytest

from macmaint.infrastructure.environment import EnvironmentContext

# Keep a developer's MACMAINT_* overrides out of the test run
for _key in [k for k in os.environ if k.startswith("MACMAINT_")]:
    del os.environ[_key]


@pytest.fixture
def env() -> EnvironmentContext:
    return EnvironmentContext(home=Path("/Users/tester"), user="tester", uid=501)
