# materials/presets.py
from pathtracer.core.vector import Colour
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import Light
from pathtracer.materials.lambertian import Diffuse
from pathtracer.materials.metal import Metal
from pathtracer.materials.phong import Phong, PhongMirror

class MetalPresets:
    """Predefined metal materials used by the preset scenes."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Colour(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Colour(0.9, 0.9, 0.9), fuzz=0.0)

class DielectricPresets:

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.52)  # Common glass

class LightPresets:
    """Light sources with different tints."""

    @staticmethod
    def warm_light(intensity: float = 1.0) -> Light:
        return Light(Colour(1.0, 0.95, 0.9), intensity)

    @staticmethod
    def daylight(intensity: float = 1.0) -> Light:
        return Light(Colour(1.0, 1.0, 1.0), intensity)

class ColorPresets:
    """Common color presets for materials."""

    RED = Colour(0.65, 0.05, 0.05)
    GREEN = Colour(0.12, 0.45, 0.15)
    BLUE = Colour(0.2, 0.3, 0.9)
    WHITE = Colour(0.73, 0.73, 0.73)
    GRAY = Colour(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Colour) -> Diffuse:
        """Create a matte material with the given color."""
        return Diffuse(color)

    @staticmethod
    def plastic(color: Colour, shininess: float = 32.0) -> Phong:
        return Phong(color, shininess)

    @staticmethod
    def polished(color: Colour, shininess: float = 64.0) -> PhongMirror:
        return PhongMirror(color, shininess, refraction_index=1.5)
