# pdf/pdf.py
"""
Probability densities over directions, used for importance sampling.
"""
import math
from pathtracer.core.utils import random_unit_vector, sample_hemisphere_cosine
from pathtracer.core.vector import Point3, Vector3

class Pdf:
    """
    Abstract direction density. ``value`` and ``generate`` must agree:
    ``value(d)`` is the density with which ``generate`` produces ``d``.
    """
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, rng) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")

class CosinePdf(Pdf):
    """Cosine-weighted hemisphere around a reference direction."""

    def __init__(self, direction: Vector3):
        self.direction = direction.normalize()

    def value(self, direction: Vector3) -> float:
        cosine = direction.normalize().dot(self.direction)
        return max(0.0, cosine / math.pi)

    def generate(self, rng) -> Vector3:
        return sample_hemisphere_cosine(self.direction, rng)

class SpherePdf(Pdf):
    """Uniform density over the whole unit sphere."""

    def value(self, direction: Vector3) -> float:
        return 1.0 / (4.0 * math.pi)

    def generate(self, rng) -> Vector3:
        return random_unit_vector(rng)

class PrimitivePdf(Pdf):
    """Directions from ``origin`` toward uniformly sampled points of a primitive."""

    def __init__(self, primitive, origin: Point3):
        self.primitive = primitive
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.primitive.pdf_value(self.origin, direction)

    def generate(self, rng) -> Vector3:
        return self.primitive.sample(rng) - self.origin

class MixturePdf(Pdf):
    """
    Weighted combination of two densities. The same weight drives both
    ``value`` and ``generate``; the small share left to the fallback avoids
    directions with zero density.
    """
    def __init__(self, primary: Pdf, fallback: Pdf, weight: float = 0.99):
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"mixture weight must lie in [0, 1], got {weight}")
        self.primary = primary
        self.fallback = fallback
        self.weight = weight

    def value(self, direction: Vector3) -> float:
        return (self.weight * self.primary.value(direction) +
                (1.0 - self.weight) * self.fallback.value(direction))

    def generate(self, rng) -> Vector3:
        if rng.random() < self.weight:
            return self.primary.generate(rng)
        return self.fallback.generate(rng)
