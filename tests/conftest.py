"""Shared pytest fixtures for PanelTimer tests."""

import os
import sys
import pytest

# No display on CI machines.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from paneltimer.timer.engine import CountdownEngine

from helpers import RecordingObserver, FakeAlarm


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def alarm():
    return FakeAlarm()


@pytest.fixture
def engine(qapp, observer, alarm):
    """Fresh CountdownEngine wired to a recording observer and fake alarm."""
    eng = CountdownEngine(observer, parent=None, alarm=alarm)
    yield eng
    eng.destroy()
