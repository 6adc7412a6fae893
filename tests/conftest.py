"""Shared fixtures: small synthetic flow tables and matrices."""

import pandas as pd
import pytest


@pytest.fixture
def flow_matrix():
    """Three units, four flows.

    A -> B: 5
    B -> A: 3, B -> C: 2
    C -> B: 1
    """
    ids = ["A", "B", "C"]
    return pd.DataFrame([[0, 5, 0],
                         [3, 0, 2],
                         [0, 1, 0]], index=ids, columns=ids)


@pytest.fixture
def flow_records():
    """Long-format records of flow_matrix, with A -> B split in two rows."""
    return pd.DataFrame({
        "i":   ["A", "A", "B", "B", "C"],
        "j":   ["B", "B", "A", "C", "B"],
        "fij": [2,   3,   3,   2,   1],
    })


@pytest.fixture(autouse=True)
def default_log_level(monkeypatch):
    """Run every test at the default INFO threshold."""
    monkeypatch.delenv("FLOWMAT_LOG_LEVEL", raising=False)
