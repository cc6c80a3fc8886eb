from pathtracer.renderer.image import encode_rgb8, write_image, write_png, write_ppm
from pathtracer.renderer.integrator import PathIntegrator, PathStats
from pathtracer.renderer.raytracer import Renderer

__all__ = [
    "encode_rgb8", "write_image", "write_png", "write_ppm",
    "PathIntegrator", "PathStats", "Renderer",
]
