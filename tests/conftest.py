"""Shared fixtures."""

from __future__ import annotations

from datetime import datetime

import pytest

from tests.factories import REF_NOW, Clock


@pytest.fixture
def ref_now() -> datetime:
    return REF_NOW


@pytest.fixture
def clock() -> Clock:
    return Clock(REF_NOW)
