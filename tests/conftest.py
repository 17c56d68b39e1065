"""Test configuration and fixtures for Outline Navigator.

Shared fixtures build on the fakes in ``tests/fakes.py``: a manually driven
task runner for simulating slow background calls, and sample outlines used
by the core and controller tests.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from outline_navigator.config import ConfigManager
from outline_navigator.core.exceptions import OutlineFetchError
from outline_navigator.core.models import OutlineNode
from outline_navigator.core.services.task_runner import InlineTaskRunner
from tests.fakes import FakeSource, ManualTaskRunner, make_outline

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def manual_runner() -> ManualTaskRunner:
    return ManualTaskRunner()


@pytest.fixture
def inline_runner() -> InlineTaskRunner:
    return InlineTaskRunner()


@pytest.fixture
def chapters_outline() -> Callable[[], List[OutlineNode]]:
    """Factory for the two-chapter outline: Ch1 > 1.1, Ch2."""
    return lambda: make_outline([("Ch1", ["1.1"]), "Ch2"])


@pytest.fixture
def failing_source() -> FakeSource:
    return FakeSource(OutlineFetchError("corrupt xref table", "broken.pdf"), name="broken.pdf")


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty temp dir and reload configuration."""
    monkeypatch.setenv("OUTLINE_NAVIGATOR_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    yield tmp_path
    ConfigManager.reset()
