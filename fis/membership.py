"""
Piecewise-linear membership functions.

A membership function describes one linguistic level of a numeric variable
(e.g. 'distanceLow', 'speedHigh') by four points on the x-axis:

    start     -> degree 0
    top_left  -> degree 1
    top_right -> degree 1
    end       -> degree 0

Triangles are the special case top_left == top_right; shoulders (step-up or
step-down) are the special cases start == top_left or top_right == end.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum

from fis.errors import ConfigurationError

# Group index 0 switches a membership function off: it is never fuzzified
# and never matched during defuzzification.
DISABLED_GROUP = 0
FIRST_GROUP = 1


class MembershipKind(str, Enum):
    """Namespace a membership function is registered in."""

    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class MembershipFunction:
    """
    A triangular or trapezoidal fuzzy set over one numeric variable.

    Attributes:
        name (str): Key of the function inside its namespace.
        start (float): Left foot, degree 0.
        top_left (float): Left end of the plateau, degree 1.
        top_right (float): Right end of the plateau, degree 1.
        end (float): Right foot, degree 0.
        group_index (int): Variable this function belongs to (1..N), 0 = disabled.
        kind (MembershipKind): Input or output namespace.
    """

    name: str
    start: float
    top_left: float
    top_right: float
    end: float
    group_index: int = FIRST_GROUP
    kind: MembershipKind = MembershipKind.INPUT

    def __post_init__(self) -> None:
        if not self.start <= self.top_left <= self.top_right <= self.end:
            raise ConfigurationError(
                f"Invalid shape for '{self.name}': "
                f"[{self.start}, {self.top_left}, {self.top_right}, {self.end}] "
                "must satisfy start <= top_left <= top_right <= end"
            )
        if int(self.group_index) != self.group_index or self.group_index < DISABLED_GROUP:
            raise ConfigurationError(
                f"Invalid group index {self.group_index!r} for '{self.name}'"
            )
        object.__setattr__(self, "kind", MembershipKind(self.kind))

    @property
    def enabled(self) -> bool:
        return self.group_index != DISABLED_GROUP

    @property
    def points(self) -> tuple:
        return (self.start, self.top_left, self.top_right, self.end)

    def degree(self, value: float) -> float:
        """
        Calculates the degree of membership of a crisp value.

        Args:
            value (float): The crisp value.

        Returns:
            float: The degree of membership, from 0.0 to 1.0.
        """
        if value < self.start or value > self.end:
            return 0.0
        if self.top_left <= value <= self.top_right:
            return 1.0
        # Ramps are only reachable when they have a non-zero width, so step
        # shapes never divide by zero.
        if value < self.top_left:
            return (value - self.start) / (self.top_left - self.start)
        if value > self.top_right:
            return (self.end - value) / (self.end - self.top_right)
        # NaN falls through every comparison.
        return 0.0

    def reshaped(self, **changes) -> "MembershipFunction":
        """Returns a validated copy with some points (or the group) replaced."""
        return dataclasses.replace(self, **changes)


def from_points(name: str, points, group_index: int, kind: MembershipKind) -> MembershipFunction:
    """
    Builds a membership function from a 3-point triangle or a 4-point trapezoid.

    Args:
        name (str): Function name.
        points (Sequence[float]): [a, b, c] or [a, b, c, d].
        group_index (int): Variable group.
        kind (MembershipKind): Input or output.
    """
    values = [float(p) for p in points]
    if len(values) == 3:
        a, b, c = values
        values = [a, b, b, c]
    elif len(values) != 4:
        raise ConfigurationError(
            f"Invalid membership function shape for '{name}': {list(points)}"
        )
    return MembershipFunction(name, *values, group_index=group_index, kind=kind)
