# geometry/hittable.py
from typing import Iterator, List, Optional
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3, Vector3

class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("point", "normal", "t", "front_face", "object")

    def __init__(self, point: Point3 = None, normal: Vector3 = None,
                 t: float = 0.0, front_face: bool = True, object=None):
        self.point = point            # Intersection point
        self.normal = normal          # Unit normal, always against the ray
        self.t = t                    # Ray parameter at intersection
        self.front_face = front_face  # Whether the hit was on the outward side
        self.object = object          # Primitive that owns the hit

    @property
    def material(self):
        return self.object.material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        ``outward_normal`` is assumed to be unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

class Primitive(Hittable):
    """
    A geometric object of the scene carrying a (shared, read-only) material
    and its surface area, used when the primitive acts as a light.
    """
    material = None
    area = 0.0
    # shadow samples a Phong surface takes towards this primitive as a light
    phong_samples = 10

    def sample(self, rng) -> Point3:
        """Returns a point on the surface, uniformly distributed over its area."""
        raise NotImplementedError("sample() must be implemented by subclasses.")

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        """
        Solid-angle density, seen from ``origin``, of the directions produced
        by aiming at ``sample()`` points. Zero when the direction misses.
        """
        raise NotImplementedError("pdf_value() must be implemented by subclasses.")

class HittableList(Hittable):
    """
    A list of Hittable objects answering nearest-hit queries.
    """
    def __init__(self, objects: Optional[List[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __getitem__(self, i: int) -> Hittable:
        return self.objects[i]

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = ray_t.max
        for obj in self.objects:
            rec = obj.hit(ray, ray_t.with_max(closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
