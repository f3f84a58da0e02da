from typing import Callable, Dict, List, Sequence

from coreason_branch_verifier.exceptions import ConfigurationError
from coreason_branch_verifier.harness.runner import Scenario
from coreason_branch_verifier.scenarios import feature_branch, secondary_main

SCENARIOS: Dict[str, Callable[[], Scenario]] = {
    "secondary-main": secondary_main.build_scenario,
    "feature-branch": feature_branch.build_scenario,
}


def resolve_scenarios(names: Sequence[str]) -> List[Scenario]:
    """
    Builds the named scenarios in the given order; all of them when no name is given.

    Raises:
        ConfigurationError: If a name is not registered.
    """
    if not names:
        return [build() for build in SCENARIOS.values()]

    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        raise ConfigurationError(
            f"Unknown scenario(s): {', '.join(unknown)}. Available: {', '.join(SCENARIOS)}"
        )
    return [SCENARIOS[name]() for name in names]


__all__ = ["SCENARIOS", "resolve_scenarios"]
