"""Shared pytest fixtures for payload test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def reset_payload_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    from error_payload.core.config import get_field_constructor
    from error_payload.core.config import get_payload_settings

    get_payload_settings.cache_clear()
    get_field_constructor.cache_clear()
    yield
    get_payload_settings.cache_clear()
    get_field_constructor.cache_clear()
