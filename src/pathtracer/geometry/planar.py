# geometry/planar.py
from typing import Optional
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON, sample_quad, sample_triangle
from pathtracer.core.vector import NEAR_ZERO, Point3, Vector3
from pathtracer.geometry.hittable import HitRecord, Primitive

class Primitive2D(Primitive):
    """
    A flat primitive spanned by an origin point and two vectors u, v.

    A point of the plane is P = origin + alpha*u + beta*v. Subclasses only
    decide which (alpha, beta) pairs lie inside the primitive.
    """
    def __init__(self, origin: Point3, u: Vector3, v: Vector3, material):
        self.origin = origin
        self.u = u
        self.v = v
        self.material = material

        n = u.cross(v)
        n_len2 = n.dot(n)
        # Zero-area spans have no plane; such primitives are never hit.
        self.degenerate = n_len2 < NEAR_ZERO * NEAR_ZERO
        if self.degenerate:
            self.normal = Vector3(0.0, 0.0, 0.0)
            self.w = Vector3(0.0, 0.0, 0.0)
            self.d = 0.0
        else:
            self.normal = n.normalize()
            # d is the constant term of the plane equation n . P = d
            self.d = self.normal.dot(origin)
            # w turns a planar offset into (alpha, beta)
            self.w = n / n_len2
        self.area = self._area(n_len2 ** 0.5)

    def _area(self, span_area: float) -> float:
        raise NotImplementedError

    def is_interior(self, alpha: float, beta: float) -> bool:
        raise NotImplementedError

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if self.degenerate:
            return None
        denom = self.normal.dot(ray.direction)

        # Ray parallel to the plane
        if abs(denom) < NEAR_ZERO:
            return None

        t = (self.d - self.normal.dot(ray.origin)) / denom
        if not ray_t.contains(t):
            return None

        point = ray.at(t)
        op = point - self.origin
        alpha = self.w.dot(op.cross(self.v))
        beta = self.w.dot(self.u.cross(op))
        if not self.is_interior(alpha, beta):
            return None

        rec = HitRecord(point=point, t=t, object=self)
        rec.set_face_normal(ray, self.normal)
        return rec

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        if self.area <= 0.0:
            return 0.0
        ray = Ray(origin, direction)
        rec = self.hit(ray, Interval(RAY_EPSILON, float("inf")))
        if rec is None:
            return 0.0
        cosine = abs(ray.direction.dot(self.normal))
        if cosine < NEAR_ZERO:
            return 0.0
        return rec.t * rec.t / (cosine * self.area)

class Quad(Primitive2D):
    """Parallelogram with corners origin, origin+u, origin+v, origin+u+v."""

    def _area(self, span_area: float) -> float:
        return span_area

    def is_interior(self, alpha: float, beta: float) -> bool:
        return 0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0

    def sample(self, rng) -> Point3:
        return sample_quad(self.origin, self.u, self.v, rng)

class Triangle(Primitive2D):
    """Triangle with vertices a, b, c (counter-clockwise seen from the front)."""

    def __init__(self, a: Point3, b: Point3, c: Point3, material):
        self.a = a
        self.b = b
        self.c = c
        super().__init__(a, b - a, c - a, material)

    def _area(self, span_area: float) -> float:
        return 0.5 * span_area

    def is_interior(self, alpha: float, beta: float) -> bool:
        return alpha > 0.0 and beta > 0.0 and alpha + beta <= 1.0

    def sample(self, rng) -> Point3:
        return sample_triangle(self.origin, self.u, self.v, rng)
