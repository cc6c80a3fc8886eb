# core/interval.py
import math

class Interval:
    """
    Closed numeric range [min, max]. Used to bound valid hit distances.
    """
    __slots__ = ("min", "max")

    def __init__(self, min: float = math.inf, max: float = -math.inf):
        self.min = min
        self.max = max

    def size(self) -> float:
        return self.max - self.min

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max

    def surrounds(self, x: float) -> bool:
        return self.min < x < self.max

    def clamp(self, x: float) -> float:
        if x < self.min:
            return self.min
        if x > self.max:
            return self.max
        return x

    def with_max(self, new_max: float) -> "Interval":
        """Returns a copy narrowed (or widened) to a new upper bound."""
        return Interval(self.min, new_max)

    def __repr__(self) -> str:
        return f"Interval({self.min}, {self.max})"

EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)
