# core/ray.py
from pathtracer.core.vector import Point3, Vector3

class Ray:
    """
    Represents a ray in 3D space with an origin and a unit direction.
    The direction is normalized once at construction and never changes.
    """
    __slots__ = ("_origin", "_direction")

    def __init__(self, origin: Point3, direction: Vector3):
        self._origin = origin
        self._direction = direction.normalize()

    @property
    def origin(self) -> Point3:
        return self._origin

    @property
    def direction(self) -> Vector3:
        return self._direction

    def at(self, t: float) -> Point3:
        """
        Returns the point along the ray at parameter t.
        """
        return self._origin + self._direction * t

    def __repr__(self) -> str:
        return f"Ray({self._origin!r}, {self._direction!r})"
