from pathtracer.geometry.box import Box
from pathtracer.geometry.hittable import HitRecord, Hittable, HittableList, Primitive
from pathtracer.geometry.mesh import Mesh, load_obj
from pathtracer.geometry.planar import Primitive2D, Quad, Triangle
from pathtracer.geometry.scene import Scene
from pathtracer.geometry.sphere import Sphere

__all__ = [
    "HitRecord", "Hittable", "HittableList", "Primitive",
    "Sphere", "Primitive2D", "Quad", "Triangle", "Box", "Mesh", "load_obj",
    "Scene",
]
