from pathtracer.materials.dielectric import Dielectric, reflectance
from pathtracer.materials.diffuse_light import Light
from pathtracer.materials.lambertian import Diffuse
from pathtracer.materials.material import EvalRecord, Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.phong import Phong, PhongMirror

__all__ = [
    "Material", "EvalRecord", "Diffuse", "Metal", "Dielectric",
    "Light", "Phong", "PhongMirror", "reflectance",
]
