"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest

from entity_builder.mapping.hydrator import Hydrator


@pytest.fixture
def hydrator() -> Hydrator:
    """Unrestricted hydrator."""
    return Hydrator()


@pytest.fixture
def debug_log(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture DEBUG records emitted by the entity_builder loggers."""
    caplog.set_level(logging.DEBUG, logger="entity_builder")
    return caplog
