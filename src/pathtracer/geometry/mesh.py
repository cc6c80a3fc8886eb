# geometry/mesh.py
import logging
import math
from typing import List, Optional, Sequence, Tuple
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import build_cdf, sample_cdf
from pathtracer.core.vector import Point3, Vector3
from pathtracer.geometry.box import Box
from pathtracer.geometry.hittable import HitRecord, HittableList, Primitive
from pathtracer.geometry.planar import Triangle

logger = logging.getLogger(__name__)

# Padding applied to the bounding box so flat meshes keep a usable volume.
BBOX_PADDING = 1e-4

VertexTriple = Tuple[Point3, Point3, Point3]

class Mesh(Primitive):
    """
    Triangle soup with a bounding box used to skip most intersection tests.
    All triangles share the mesh material.
    """
    def __init__(self, triangles: Sequence[VertexTriple], material):
        if not triangles:
            raise ValueError("a mesh needs at least one triangle")
        self.material = material
        self.triangles = HittableList([Triangle(a, b, c, material) for a, b, c in triangles])
        self.bbox = self._compute_bbox()
        self.triangle_cdf, self.area = build_cdf([tri.area for tri in self.triangles])

    def _compute_bbox(self) -> Box:
        pmin = [math.inf, math.inf, math.inf]
        pmax = [-math.inf, -math.inf, -math.inf]
        for tri in self.triangles:
            for vertex in (tri.a, tri.b, tri.c):
                for axis, value in enumerate(vertex):
                    pmin[axis] = min(pmin[axis], value)
                    pmax[axis] = max(pmax[axis], value)
        pad = Vector3(BBOX_PADDING, BBOX_PADDING, BBOX_PADDING)
        return Box(Point3(*pmin) - pad, Point3(*pmax) + pad, self.material)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Any box face ahead of the ray origin means the box is reachable,
        # including when the origin is inside the box.
        if self.bbox.hit(ray, ray_t.with_max(math.inf)) is None:
            return None
        rec = self.triangles.hit(ray, ray_t)
        if rec is not None:
            rec.object = self
        return rec

    def sample(self, rng) -> Point3:
        # area-weighted triangle choice keeps the samples uniform over the mesh
        tri = self.triangles[sample_cdf(self.triangle_cdf, rng)]
        return tri.sample(rng)

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        if self.area <= 0.0:
            return 0.0
        if self.bbox.hit(Ray(origin, direction), Interval(0.0, math.inf)) is None:
            return 0.0
        return sum(tri.area / self.area * tri.pdf_value(origin, direction)
                   for tri in self.triangles if tri.area > 0.0)

def _face_index(token: str, vertex_count: int) -> int:
    # "7", "7/1", "7//3" and "7/1/3" all refer to vertex 7; negatives count from the end
    idx = int(token.split('/')[0])
    resolved = vertex_count + idx if idx < 0 else idx - 1
    if idx == 0 or not 0 <= resolved < vertex_count:
        raise ValueError(f"vertex index {idx} out of range")
    return resolved

def load_obj(filename: str, material) -> Mesh:
    """
    Load a triangle mesh from a Wavefront OBJ file.

    Only ``v`` and ``f`` records are used; polygons are fan-triangulated.
    A missing file raises FileNotFoundError, a malformed record ValueError.
    """
    vertices: List[Point3] = []
    triangles: List[VertexTriple] = []

    logger.info("Loading mesh from %s", filename)
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            try:
                if values[0] == 'v':
                    vertices.append(Point3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'f':
                    indices = [_face_index(v, len(vertices)) for v in values[1:]]
                    if len(indices) < 3:
                        raise ValueError("face with fewer than 3 vertices")
                    for i in range(1, len(indices) - 1):
                        triangles.append((vertices[indices[0]],
                                          vertices[indices[i]],
                                          vertices[indices[i + 1]]))
                else:
                    logger.debug("Skipping OBJ record %r at line %d", values[0], line_num)
            except (IndexError, ValueError) as e:
                logger.error("Error processing line %d of %s: %s", line_num, filename, line.strip())
                raise ValueError(f"{filename}:{line_num}: {e}") from e

    logger.info("Loaded %d vertices, %d triangles", len(vertices), len(triangles))
    return Mesh(triangles, material)
