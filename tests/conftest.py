"""Shared pytest fixtures for Focus Timer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from focustimer.settings import PreferenceStore
from focustimer.timer.engine import TimerEngine

from helpers import FakeAlert


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def alert():
    return FakeAlert()


@pytest.fixture
def engine(qapp, alert):
    """Fresh TimerEngine wired to a recording alert double."""
    return TimerEngine(parent=None, alert=alert)


@pytest.fixture
def store(tmp_path):
    """Preference store backed by a throwaway JSON file."""
    return PreferenceStore(tmp_path / "settings.json")
