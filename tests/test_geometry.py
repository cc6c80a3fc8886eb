import math

import pytest

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RAY_EPSILON, random_unit_vector
from pathtracer.core.vector import Colour, Point3, Vector3
from pathtracer.geometry.box import Box
from pathtracer.geometry.mesh import Mesh
from pathtracer.geometry.planar import Quad, Triangle
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Diffuse
from pathtracer.geometry.hittable import HittableList
from pathtracer.pdf.pdf import CosinePdf, MixturePdf, PrimitivePdf, SpherePdf

FORWARD = Interval(RAY_EPSILON, math.inf)


def random_point(rng, scale):
    return Point3(*(rng.uniform(-scale, scale) for _ in range(3)))


def test_sphere_hits_lie_on_the_surface(rng, grey):
    hits = 0
    for _ in range(300):
        sphere = Sphere(random_point(rng, 2), rng.uniform(0.1, 2.0), grey)
        # aim roughly at the sphere so most rays hit; some start inside
        origin = random_point(rng, 4)
        target = sphere.center + random_unit_vector(rng) * sphere.radius * 1.2
        ray = Ray(origin, target - origin)
        rec = sphere.hit(ray, FORWARD)
        if rec is None:
            continue
        hits += 1
        assert math.isclose((rec.point - sphere.center).length(), sphere.radius,
                            rel_tol=1e-7, abs_tol=1e-9)
        assert math.isclose(rec.normal.length(), 1.0, rel_tol=1e-9)
        assert ray.direction.dot(rec.normal) <= 0.0
        assert FORWARD.contains(rec.t)
        assert rec.object is sphere
    assert hits > 80


def test_sphere_prefers_near_root_then_far_root(grey):
    sphere = Sphere(Point3(0, 0, -3), 1.0, grey)
    ray = Ray(Point3(0, 0, 0), Vector3(0, 0, -1))
    assert math.isclose(sphere.hit(ray, FORWARD).t, 2.0)
    rec = sphere.hit(ray, Interval(2.5, math.inf))
    assert math.isclose(rec.t, 4.0)
    assert not rec.front_face
    assert sphere.hit(ray, Interval(4.5, math.inf)) is None


def test_negative_radius_is_clamped(grey):
    sphere = Sphere(Point3(0, 0, -1), -2.0, grey)
    assert sphere.radius == 0.0
    assert sphere.area == 0.0
    assert sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), FORWARD) is None


def test_quad_hit_and_boundary(wall):
    rec = wall.hit(Ray(Point3(0.5, 0.5, 2), Vector3(0, 0, -1)), FORWARD)
    assert rec is not None
    assert math.isclose(rec.t, 2.0)
    assert rec.front_face
    assert rec.normal.is_close(Vector3(0, 0, 1))
    assert wall.hit(Ray(Point3(1.5, 0, 2), Vector3(0, 0, -1)), FORWARD) is None
    # from behind the normal is flipped towards the ray
    rec = wall.hit(Ray(Point3(0, 0, -2), Vector3(0, 0, 1)), FORWARD)
    assert not rec.front_face
    assert rec.normal.is_close(Vector3(0, 0, -1))


def test_parallel_ray_misses(wall):
    assert wall.hit(Ray(Point3(0, 0, 1), Vector3(1, 0, 0)), FORWARD) is None


def test_hit_outside_interval_is_rejected(wall):
    ray = Ray(Point3(0, 0, 2), Vector3(0, 0, -1))
    assert wall.hit(ray, Interval(RAY_EPSILON, 1.0)) is None


def test_degenerate_quad_never_hits(grey):
    flat = Quad(Point3(0, 0, 0), Vector3(1, 0, 0), Vector3(2, 0, 0), grey)
    assert flat.area == 0.0
    assert flat.hit(Ray(Point3(0.5, 0, 1), Vector3(0, 0, -1)), FORWARD) is None


def test_triangle_interior(grey):
    tri = Triangle(Point3(0, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0), grey)
    assert math.isclose(tri.area, 0.5)
    assert tri.hit(Ray(Point3(0.2, 0.2, 1), Vector3(0, 0, -1)), FORWARD) is not None
    assert tri.hit(Ray(Point3(0.6, 0.6, 1), Vector3(0, 0, -1)), FORWARD) is None


def test_box_hit_is_relabelled_with_outward_normals(grey):
    box = Box(Point3(1, 1, 1), Point3(-1, -1, -1), grey)
    assert math.isclose(box.area, 24.0)
    directions = [Vector3(1, 0, 0), Vector3(-1, 0, 0), Vector3(0, 1, 0),
                  Vector3(0, -1, 0), Vector3(0, 0, 1), Vector3(0, 0, -1)]
    for d in directions:
        ray = Ray(d * -5, d)
        rec = box.hit(ray, FORWARD)
        assert rec.object is box
        assert math.isclose(rec.t, 4.0)
        assert rec.front_face
        assert rec.normal.is_close(-d)


def test_box_sampling_is_area_weighted(rng, grey):
    box = Box(Point3(0, 0, 0), Point3(2, 1, 1), grey)
    n = 4000
    on_x_faces = 0
    for _ in range(n):
        p = box.sample(rng)
        if abs(p.x) < 1e-12 or abs(p.x - 2) < 1e-12:
            on_x_faces += 1
    # the two x faces hold 2 of the 10 units of area
    assert abs(on_x_faces / n - 0.2) < 0.03


def tetrahedron(material):
    a = Point3(0, 0, 0)
    b = Point3(1, 0, 0)
    c = Point3(0, 1, 0)
    d = Point3(0, 0, 1)
    return Mesh([(a, c, b), (a, b, d), (a, d, c), (b, c, d)], material)


def test_mesh_hit_relabels_object(grey):
    mesh = tetrahedron(grey)
    rec = mesh.hit(Ray(Point3(0.2, 0.2, 5), Vector3(0, 0, -1)), FORWARD)
    assert rec.object is mesh
    assert rec.material is grey
    assert mesh.hit(Ray(Point3(3, 3, 5), Vector3(0, 0, -1)), FORWARD) is None


def test_mesh_hit_from_inside_bounding_box(grey):
    mesh = tetrahedron(grey)
    rec = mesh.hit(Ray(Point3(0.1, 0.1, 0.1), Vector3(1, 1, 1)), FORWARD)
    assert rec is not None
    assert not rec.front_face or rec.normal.dot(Vector3(1, 1, 1)) < 0


def test_flat_mesh_keeps_a_usable_box(grey):
    mesh = Mesh([(Point3(0, 0, 0), Point3(1, 0, 0), Point3(0, 1, 0))], grey)
    rec = mesh.hit(Ray(Point3(0.25, 0.25, 1), Vector3(0, 0, -1)), FORWARD)
    assert rec is not None and math.isclose(rec.t, 1.0)


def test_empty_mesh_is_rejected(grey):
    with pytest.raises(ValueError):
        Mesh([], grey)


@pytest.mark.parametrize("make", [
    lambda m: Quad(Point3(-1, -1, -2), Vector3(2, 0, 0), Vector3(0, 2, 0), m),
    lambda m: Triangle(Point3(-1, -1, -2), Point3(1, -1, -2), Point3(0, 1, -3), m),
    lambda m: Sphere(Point3(0, 0, -3), 1.0, m),
    lambda m: Box(Point3(-1, -1, -4), Point3(1, 0.5, -2), m),
    tetrahedron,
], ids=["quad", "triangle", "sphere", "box", "mesh"])
def test_pdf_value_matches_sampling(rng, make):
    # Drawing from a mixture with the uniform sphere keeps the estimator bounded:
    # E[p(d) / mixture(d)] over mixture samples is the total mass of p, i.e. 1.
    primitive = make(Diffuse(Colour(0.5, 0.5, 0.5)))
    origin = Point3(0.1, 0.2, 0.5)
    target = PrimitivePdf(primitive, origin)
    mixture = MixturePdf(target, SpherePdf(), 0.5)
    n = 4000
    total = 0.0
    for _ in range(n):
        d = mixture.generate(rng)
        total += target.value(d) / mixture.value(d)
    assert abs(total / n - 1.0) < 0.06


def test_pdf_value_is_zero_when_missing(wall):
    assert wall.pdf_value(Point3(0, 0, 1), Vector3(0, 0, 1)) == 0.0


def test_cosine_pdf_samples_follow_its_density(rng):
    normal = Vector3(0.3, 1, -0.2).normalize()
    pdf = CosinePdf(normal)
    n = 20000
    cosines = [pdf.generate(rng).dot(normal) for _ in range(n)]
    assert min(cosines) >= 0.0
    # cos(theta) / pi over the hemisphere has E[cos] = 2/3
    assert abs(sum(cosines) / n - 2.0 / 3.0) < 0.01


def test_cosine_pdf_integrates_to_one(rng):
    pdf = CosinePdf(Vector3(0, 0, 1))
    uniform = SpherePdf()
    n = 20000
    total = 0.0
    for _ in range(n):
        d = uniform.generate(rng)
        total += pdf.value(d) / uniform.value(d)
    assert abs(total / n - 1.0) < 0.04
    assert pdf.value(Vector3(0, 0, -1)) == 0.0
    assert math.isclose(pdf.value(Vector3(0, 0, 1)), 1.0 / math.pi)


def test_sphere_pdf_is_uniform(rng):
    pdf = SpherePdf()
    n = 20000
    mean = Vector3(0, 0, 0)
    upper = 0
    for _ in range(n):
        d = pdf.generate(rng)
        assert math.isclose(d.length(), 1.0, rel_tol=1e-9)
        assert math.isclose(pdf.value(d), 1.0 / (4.0 * math.pi))
        mean = mean + d
        upper += d.z > 0.5
    mean = mean / n
    assert mean.length() < 0.03
    # the cap above z = 0.5 holds a quarter of the sphere
    assert abs(upper / n - 0.25) < 0.015


def test_mixture_pdf_value_matches_its_samples(rng):
    target = CosinePdf(Vector3(0, 1, 0))
    mixture = MixturePdf(target, SpherePdf(), 0.7)
    n = 20000
    total = 0.0
    for _ in range(n):
        d = mixture.generate(rng)
        total += target.value(d) / mixture.value(d)
    assert abs(total / n - 1.0) < 0.03


@pytest.mark.parametrize("weight", [-0.1, 1.5])
def test_mixture_weight_outside_unit_range(weight):
    with pytest.raises(ValueError):
        MixturePdf(CosinePdf(Vector3(0, 0, 1)), SpherePdf(), weight)


class RecordingPlane(Quad):
    def __init__(self, *args):
        super().__init__(*args)
        self.intervals = []

    def hit(self, ray, ray_t):
        self.intervals.append((ray_t.min, ray_t.max))
        return super().hit(ray, ray_t)


def test_list_hit_narrows_the_interval_to_the_closest_hit(grey):
    near = RecordingPlane(Point3(-1, -1, -2), Vector3(2, 0, 0), Vector3(0, 2, 0), grey)
    far = RecordingPlane(Point3(-1, -1, -5), Vector3(2, 0, 0), Vector3(0, 2, 0), grey)
    objects = HittableList([near, far])
    rec = objects.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, -1)), FORWARD)
    assert rec.t == pytest.approx(2.0)
    assert near.intervals == [(RAY_EPSILON, math.inf)]
    assert far.intervals[0][0] == RAY_EPSILON
    assert far.intervals[0][1] == pytest.approx(2.0)
