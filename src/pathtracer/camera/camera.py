# camera/camera.py
import math
from typing import Optional, Sequence, Union
from pathtracer.config import ConfigError
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk, sample_quad, sample_quad_stratified
from pathtracer.core.vector import Point3, Vector3

VectorLike = Union[Vector3, Sequence[float]]

def _as_vector(value: VectorLike) -> Vector3:
    if isinstance(value, Vector3):
        return value
    x, y, z = value
    return Vector3(float(x), float(y), float(z))

class Camera:
    """
    Pinhole or thin-lens camera looking from ``look_from`` toward ``look_at``.

    The image has ``image_width`` columns and ``image_width / aspect_ratio``
    rows (at least one). Pixel (i, j) counts columns from the left and rows
    from the top. A positive ``defocus_angle`` (degrees) jitters ray origins
    over a disk to get depth of field around ``focus_dist``.
    """
    def __init__(self, image_width: int = 100, aspect_ratio: float = 1.0,
                 vfov: float = 90.0,
                 look_from: VectorLike = (0.0, 0.0, 0.0),
                 look_at: VectorLike = (0.0, 0.0, -1.0),
                 vup: VectorLike = (0.0, 1.0, 0.0),
                 defocus_angle: float = 0.0, focus_dist: float = 1.0):
        self.image_width = image_width
        self.aspect_ratio = aspect_ratio
        self.vfov = vfov
        self.look_from = _as_vector(look_from)
        self.look_at = _as_vector(look_at)
        self.vup = _as_vector(vup)
        self.defocus_angle = defocus_angle
        self.focus_dist = focus_dist
        self.image_height: Optional[int] = None
        self.initialize()

    def initialize(self):
        """Validates the parameters and computes the viewport."""
        if not isinstance(self.image_width, int) or self.image_width <= 0:
            raise ConfigError(f"image_width must be a positive integer, got {self.image_width!r}")
        if self.aspect_ratio <= 0:
            raise ConfigError(f"aspect_ratio must be positive, got {self.aspect_ratio!r}")
        if not 0 < self.vfov < 180:
            raise ConfigError(f"vfov must lie in (0, 180) degrees, got {self.vfov!r}")
        if self.focus_dist <= 0:
            raise ConfigError(f"focus_dist must be positive, got {self.focus_dist!r}")
        if self.defocus_angle < 0:
            raise ConfigError(f"defocus_angle must be non-negative, got {self.defocus_angle!r}")

        # the image has a locked aspect ratio, but the height has to be at least 1
        self.image_height = max(int(self.image_width / self.aspect_ratio), 1)

        view = self.look_from - self.look_at
        if view.near_zero():
            raise ConfigError("look_from and look_at must differ")
        self.center = self.look_from

        theta = math.radians(self.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # camera basis: w backwards, u right, v up
        self.w = view.normalize()
        right = self.vup.cross(self.w)
        if right.near_zero():
            raise ConfigError("vup must not be parallel to the viewing direction")
        self.u = right.normalize()
        self.v = self.w.cross(self.u)

        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        # upper left corner of the viewport; image rows grow downwards
        self.viewport_origin = (self.center - self.w * self.focus_dist
                                - viewport_u / 2.0 - viewport_v / 2.0)

        defocus_radius = self.focus_dist * math.tan(math.radians(self.defocus_angle) / 2.0)
        self.defocus_u = self.u * defocus_radius
        self.defocus_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng, cell: Optional[int] = None, sqrt_spp: int = 1) -> Ray:
        """
        Generates a jittered ray through pixel (i, j). With ``cell`` given,
        the jitter stays inside that cell of a sqrt_spp x sqrt_spp grid.
        """
        pixel_upper_left = (self.viewport_origin
                            + self.pixel_delta_u * i
                            + self.pixel_delta_v * j)
        if cell is None:
            pixel_pos = sample_quad(pixel_upper_left, self.pixel_delta_u, self.pixel_delta_v, rng)
        else:
            pixel_pos = sample_quad_stratified(pixel_upper_left, self.pixel_delta_u,
                                               self.pixel_delta_v, cell, sqrt_spp, rng)

        ray_origin = self.center
        if self.defocus_angle > 0:
            # random point on the lens
            p = random_in_unit_disk(rng)
            ray_origin = self.center + self.defocus_u * p.x + self.defocus_v * p.y

        return Ray(ray_origin, pixel_pos - ray_origin)

    def to_dict(self) -> dict:
        return {
            "image_width": self.image_width,
            "aspect_ratio": self.aspect_ratio,
            "vfov": self.vfov,
            "look_from": list(self.look_from),
            "look_at": list(self.look_at),
            "vup": list(self.vup),
            "defocus_angle": self.defocus_angle,
            "focus_dist": self.focus_dist,
        }
