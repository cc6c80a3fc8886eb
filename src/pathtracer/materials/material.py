# materials/material.py
from typing import Optional
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Colour
from pathtracer.geometry.hittable import HitRecord

class EvalRecord:
    """
    Outcome of evaluating a material at a hit point.

    ``color`` is the emitted radiance, attenuation or locally shaded colour.
    At most one continuation is set: ``pdf`` when the next direction has to
    be importance sampled, ``ray`` when the bounce is deterministic given
    the hit. With neither, the path ends here.
    """
    __slots__ = ("color", "pdf", "ray")

    def __init__(self, color: Colour, pdf=None, ray: Optional[Ray] = None):
        self.color = color
        self.pdf = pdf
        self.ray = ray

    @property
    def continues(self) -> bool:
        return self.pdf is not None or self.ray is not None

    def __repr__(self) -> str:
        return f"EvalRecord(color={self.color!r}, pdf={self.pdf!r}, ray={self.ray!r})"

class Material:
    """
    Abstract material class. Subclasses must implement evaluate().
    Materials are immutable once built and may be shared by any number of
    primitives and render workers.
    """
    def evaluate(self, scene, ray_in: Ray, hit: HitRecord, rng) -> EvalRecord:
        """
        Computes the colour and the optional continuation at ``hit``.
        """
        raise NotImplementedError("evaluate() must be implemented by subclasses.")

    def is_emissive(self) -> bool:
        return False

    def brdf(self) -> float:
        """Constant BRDF factor applied to next-event estimates."""
        return 0.0

    def scattering_pdf(self, ray_in: Ray, hit: HitRecord, scattered: Ray) -> float:
        """Cosine-weighted BRDF of the sampled direction, used to weight the path."""
        return 0.0
