from __future__ import annotations

import os

import pytest

from bending._config import DemoConfig
from bending.shell import CornerPoints, InteractionState


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def config() -> DemoConfig:
    return DemoConfig()


@pytest.fixture
def state(config: DemoConfig) -> InteractionState:
    return InteractionState(points=CornerPoints(), config=config)
