"""Mini README: Tests for the allocation policy registry.

Ensures both built-in policies register on import, lookups are
case-insensitive and custom strategies can be plugged in.
"""

import pytest

from dailybudget.budget import (
    REGISTRY,
    AllocationPolicy,
    AllocationResult,
    PolicyRegistry,
    SequentialCarryForwardPolicy,
    allocate,
    new_ledger,
)


def test_registry_contains_builtin_policies():
    assert list(REGISTRY.available_policies()) == ["rsr", "scr"]


def test_registry_instantiates_policy_case_insensitively():
    policy = REGISTRY.create(" SCR ")
    assert isinstance(policy, SequentialCarryForwardPolicy)
    assert policy.metadata()["policy"] == "scr"


def test_registry_rejects_unknown_policy():
    with pytest.raises(KeyError):
        REGISTRY.create("envelope")


def test_custom_policy_can_be_registered():
    class FlatPolicy(AllocationPolicy):
        policy_name = "flat"
        description = "Every day gets the base target."

        def allocate(self, source, base_daily_target):
            return [
                AllocationResult(day.day_number, base_daily_target, day.spent, base_daily_target - day.spent, day.locked)
                for day in source.days
            ]

    registry = PolicyRegistry()
    registry.register(FlatPolicy)

    assert list(registry.available_policies()) == ["flat"]
    assert registry.describe() == [{"policy": "flat", "description": "Every day gets the base target."}]
    results = registry.create("flat").allocate(new_ledger(2024, 2), 20.0)
    assert {result.allowance for result in results} == {20.0}


def test_allocate_uses_named_policy():
    ledger = new_ledger(2024, 2)
    assert allocate(ledger, 10.0, "rsr") == REGISTRY.create("rsr").allocate(ledger, 10.0)
