"""First-seen-wins style inference.

Several rules accept either a concrete preferred style or `'consistent'`.
In the latter case the first style found in the document becomes the
preferred one, and every later instance is compared against it.
"""
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

CONSISTENT = "consistent"


def is_consistent(option: Any) -> bool:
    """Check whether an option asks for the style to be inferred."""
    return option is None or option == CONSISTENT


class ConsistencyTracker(Generic[T]):
    """
    Holds the preferred value for one rule run.

    Create a fresh tracker per run; the preferred value is set at most
    once and never shared between runs or rules.
    """

    def __init__(self, preferred: Optional[T] = None):
        self.preferred = preferred

    def check(self, observed: T) -> Optional[T]:
        """
        Compare an observation with the preferred value.

        Returns:
            None if the observation is fine (the first observation is
            adopted when nothing is preferred yet), otherwise the expected
            value to cite in the message
        """
        if self.preferred is None:
            self.preferred = observed
            return None

        if observed != self.preferred:
            return self.preferred

        return None
