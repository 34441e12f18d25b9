"""
Test helpers for case prioritization scenario tests.

Modules:
- contract: Scenario and Expected dataclasses
- runner: Engine execution wrapper
- assertions: Contract verification helpers
"""
from .contract import Expected, Scenario
from .runner import run_scenario
from .assertions import (
    assert_contract,
    assert_explanation,
    assert_factors,
    assert_level,
    assert_score,
)

__all__ = [
    # Contract
    "Expected",
    "Scenario",
    # Runner
    "run_scenario",
    # Assertions
    "assert_contract",
    "assert_explanation",
    "assert_factors",
    "assert_level",
    "assert_score",
]
