from .context import CheckContext
from .runner import Check, CheckRunner, Scenario

__all__ = [
    "Check",
    "CheckContext",
    "CheckRunner",
    "Scenario",
]
