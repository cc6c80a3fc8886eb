"""Monte Carlo path tracer."""

__version__ = "0.1.0"

from pathtracer.camera.camera import Camera
from pathtracer.config import ConfigError, RenderSettings
from pathtracer.geometry.scene import Scene
from pathtracer.renderer.image import write_image
from pathtracer.renderer.raytracer import Renderer

__all__ = ["Camera", "ConfigError", "RenderSettings", "Scene", "Renderer", "write_image", "__version__"]
