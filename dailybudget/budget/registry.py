"""Mini README: Policy registry enabling pluggable allocation strategies.

Structure:
    * PolicyRegistry - maps policy names to ``AllocationPolicy`` classes.
    * REGISTRY - shared instance with the built-in policies registered.
    * allocate - convenience wrapper resolving a policy by name.

Both built-in policies register on import. Third-party packages can add
their own by publishing an ``AllocationPolicy`` subclass under the
``dailybudget.policies`` entry-point group.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Type

from ..logging_utils import get_logger
from ..utils.plugin_loader import load_entry_point_plugins
from .allocation import (
    AllocationPolicy,
    AllocationResult,
    DaySource,
    RetroactiveSymmetricPolicy,
    SequentialCarryForwardPolicy,
)

LOGGER = get_logger(__name__)

PLUGIN_GROUP = "dailybudget.policies"
DEFAULT_POLICY = SequentialCarryForwardPolicy.policy_name


class PolicyRegistry:
    """Simple registry for mapping policy identifiers to classes."""

    def __init__(self) -> None:
        self._policies: Dict[str, Type[AllocationPolicy]] = {}

    def register(self, policy: Type[AllocationPolicy]) -> None:
        """Register a new policy class with the registry."""

        identifier = policy.policy_name.lower()
        LOGGER.debug("Registering allocation policy '%s'", identifier)
        self._policies[identifier] = policy

    def register_plugins(self, group: str = PLUGIN_GROUP) -> int:
        """Register policy classes discovered through entry points."""

        registered = 0
        for plugin in load_entry_point_plugins(group):
            if isinstance(plugin, type) and issubclass(plugin, AllocationPolicy):
                self.register(plugin)
                registered += 1
            else:
                LOGGER.warning("Ignoring entry point %r: not an AllocationPolicy subclass", plugin)
        return registered

    def available_policies(self) -> Iterable[str]:
        """Return iterable of policy identifiers for display."""

        return sorted(self._policies.keys())

    def create(self, identifier: str) -> AllocationPolicy:
        """Instantiate the policy matching the identifier."""

        policy_cls = self._policies.get(identifier.strip().lower())
        if not policy_cls:
            raise KeyError(f"Unknown allocation policy '{identifier}'")
        return policy_cls()

    def describe(self) -> List[Dict[str, str]]:
        """Return name and description of every registered policy."""

        return [self.create(name).metadata() for name in self.available_policies()]


REGISTRY = PolicyRegistry()
REGISTRY.register(RetroactiveSymmetricPolicy)
REGISTRY.register(SequentialCarryForwardPolicy)
REGISTRY.register_plugins()


def allocate(
    source: DaySource, base_daily_target: float, policy: str = DEFAULT_POLICY
) -> List[AllocationResult]:
    """Run the named policy over ``source``."""

    return REGISTRY.create(policy).allocate(source, base_daily_target)
