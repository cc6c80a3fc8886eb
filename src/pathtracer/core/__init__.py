from pathtracer.core.interval import EMPTY, UNIVERSE, Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Colour, Point3, Vector3, reflect, refract

__all__ = ["Vector3", "Point3", "Colour", "reflect", "refract", "Ray", "Interval", "EMPTY", "UNIVERSE"]
