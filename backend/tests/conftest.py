"""
Pytest configuration for the analyzer tests.

``backend/`` is put on the import path by ``pythonpath`` in pyproject.toml.
"""

import pytest
from fastapi.testclient import TestClient

from strategy_analyzer.main import app
from strategy_analyzer.options.payoff import OptionKind, OptionLeg, Side


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def long_call():
    return OptionLeg(kind=OptionKind.CALL, strike=100, premium=5, side=Side.LONG)


@pytest.fixture
def long_put():
    return OptionLeg(kind=OptionKind.PUT, strike=100, premium=5, side=Side.LONG)
