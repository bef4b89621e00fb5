"""Root pytest configuration for all tests.

Domain and application packages are put on sys.path by the `pythonpath`
setting in pyproject.toml, so tests import `domain.*` and `application.*`
directly.

Fixtures here build LTEParameters snapshots directly; no I/O is involved
anywhere in the test suite.
"""

from __future__ import annotations

import pytest

from domain.coverage.value_objects import (
    DEFAULT_LTE_PARAMETERS,
    Environment,
    LTEParameters,
)


@pytest.fixture
def default_params() -> LTEParameters:
    """Documented default scenario: 1800 MHz urban macro cell, MAPL 148 dB."""
    return DEFAULT_LTE_PARAMETERS


@pytest.fixture(params=list(Environment), ids=lambda env: env.value)
def params_by_environment(request: pytest.FixtureRequest) -> LTEParameters:
    """Default scenario repeated for every environment class."""
    return DEFAULT_LTE_PARAMETERS.with_changes(environment=request.param)
