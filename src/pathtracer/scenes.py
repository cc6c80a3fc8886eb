# scenes.py
"""Preset scenes. Every builder returns a ``(Scene, Camera)`` pair."""
import logging
from typing import Callable, Dict, Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Colour, Point3, Vector3
from pathtracer.geometry.box import Box
from pathtracer.geometry.mesh import Mesh, load_obj
from pathtracer.geometry.planar import Quad
from pathtracer.geometry.scene import Scene
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import Light
from pathtracer.materials.lambertian import Diffuse
from pathtracer.materials.presets import ColorPresets, DielectricPresets, LightPresets, MetalPresets

logger = logging.getLogger(__name__)

SceneBuilder = Callable[..., Tuple[Scene, Camera]]

def spheres(image_width: int = 400, **_) -> Tuple[Scene, Camera]:
    """A diffuse sphere resting on a huge ground sphere under a sky-coloured ambient light."""
    scene = Scene(ambient_light=Colour(0.7, 0.8, 1.0))
    scene.add(Sphere(Point3(0, -100.5, -1), 100, Diffuse(Colour(0.8, 0.8, 0.0))))
    scene.add(Sphere(Point3(0, 0, -1), 0.5, Diffuse(Colour(0.1, 0.2, 0.5))))
    camera = Camera(image_width=image_width, aspect_ratio=16.0 / 9.0)
    return scene, camera

def materials(image_width: int = 400, **_) -> Tuple[Scene, Camera]:
    """Diffuse, glass and metal spheres side by side, with a small light overhead."""
    scene = Scene(ambient_light=Colour(0.5, 0.6, 0.8))
    scene.add(Sphere(Point3(0, -100.5, -1), 100, ColorPresets.matte(Colour(0.8, 0.8, 0.0))))
    scene.add(Sphere(Point3(0, 0, -1.2), 0.5, ColorPresets.matte(Colour(0.1, 0.2, 0.5))))
    scene.add(Sphere(Point3(-1, 0, -1), 0.5, DielectricPresets.glass()))
    scene.add(Sphere(Point3(-1, 0, -1), 0.4, Dielectric(1.0 / 1.52)))
    scene.add(Sphere(Point3(1, 0, -1), 0.5, MetalPresets.gold()))
    scene.add(Sphere(Point3(0.4, -0.2, -2.2), 0.3, MetalPresets.chrome()))
    scene.add(Sphere(Point3(0, 2.5, -1), 0.3, LightPresets.warm_light(4.0)))
    camera = Camera(image_width=image_width, aspect_ratio=16.0 / 9.0, vfov=20,
                    look_from=(-2, 2, 1), look_at=(0, 0, -1),
                    defocus_angle=0.6, focus_dist=3.4)
    return scene, camera

def cornell(image_width: int = 200, **_) -> Tuple[Scene, Camera]:
    """Cornell box lit by a ceiling quad light, with two blocks inside."""
    red = ColorPresets.matte(ColorPresets.RED)
    white = ColorPresets.matte(ColorPresets.WHITE)
    green = ColorPresets.matte(ColorPresets.GREEN)

    scene = Scene()
    scene.add(Quad(Point3(555, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555), green))
    scene.add(Quad(Point3(0, 0, 0), Vector3(0, 555, 0), Vector3(0, 0, 555), red))
    scene.add(Quad(Point3(0, 0, 0), Vector3(555, 0, 0), Vector3(0, 0, 555), white))
    scene.add(Quad(Point3(555, 555, 555), Vector3(-555, 0, 0), Vector3(0, 0, -555), white))
    scene.add(Quad(Point3(0, 0, 555), Vector3(555, 0, 0), Vector3(0, 555, 0), white))
    # faces down, into the room
    scene.add(Quad(Point3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105),
                   Light(Colour(1, 1, 1), 15.0)))
    scene.add(Box(Point3(265, 0, 295), Point3(430, 330, 460), white))
    scene.add(Box(Point3(130, 0, 65), Point3(295, 165, 230), white))

    camera = Camera(image_width=image_width, aspect_ratio=1.0, vfov=40,
                    look_from=(278, 278, -800), look_at=(278, 278, 0))
    return scene, camera

def phong(image_width: int = 400, **_) -> Tuple[Scene, Camera]:
    """Locally shaded spheres: plain Phong and a Phong mirror, lit by a sphere light."""
    scene = Scene(ambient_light=Colour(0.1, 0.1, 0.1), background=Colour(0.2, 0.2, 0.3))
    scene.add(Sphere(Point3(0, -100.5, -1), 100, ColorPresets.plastic(ColorPresets.GRAY, 8.0)))
    scene.add(Sphere(Point3(-0.6, 0, -1.2), 0.5, ColorPresets.plastic(ColorPresets.RED)))
    scene.add(Sphere(Point3(0.6, 0, -1.2), 0.5, ColorPresets.polished(ColorPresets.BLUE)))
    scene.add(Sphere(Point3(0, 3, 0), 0.5, LightPresets.daylight(1.0)))
    camera = Camera(image_width=image_width, aspect_ratio=16.0 / 9.0, vfov=60,
                    look_from=(0, 0.5, 1), look_at=(0, 0, -1))
    return scene, camera

def _pyramid(material) -> Mesh:
    apex = Point3(0, 0.8, -1)
    base = [Point3(-0.5, -0.5, -0.5), Point3(0.5, -0.5, -0.5),
            Point3(0.5, -0.5, -1.5), Point3(-0.5, -0.5, -1.5)]
    triangles = [(base[k], base[(k + 1) % 4], apex) for k in range(4)]
    triangles.append((base[0], base[2], base[1]))
    triangles.append((base[0], base[3], base[2]))
    return Mesh(triangles, material)

def mesh(image_width: int = 400, obj: Optional[str] = None, **_) -> Tuple[Scene, Camera]:
    """A triangle mesh (an OBJ file, or a built-in pyramid) under an area light."""
    scene = Scene(ambient_light=Colour(0.2, 0.2, 0.25))
    material = ColorPresets.matte(Colour(0.7, 0.3, 0.2))
    if obj is not None:
        scene.add(load_obj(obj, material))
    else:
        logger.info("No OBJ file given, using the built-in pyramid")
        scene.add(_pyramid(material))
    scene.add(Sphere(Point3(0, -100.5, -1), 100, ColorPresets.matte(ColorPresets.GRAY)))
    scene.add(Quad(Point3(-1, 2.5, -2), Vector3(2, 0, 0), Vector3(0, 0, 2),
                   LightPresets.daylight(4.0)))
    camera = Camera(image_width=image_width, aspect_ratio=16.0 / 9.0, vfov=50,
                    look_from=(1.5, 1.5, 2), look_at=(0, 0, -1))
    return scene, camera

SCENES: Dict[str, SceneBuilder] = {
    "spheres": spheres,
    "materials": materials,
    "cornell": cornell,
    "phong": phong,
    "mesh": mesh,
}

def build_scene(name: str, **options) -> Tuple[Scene, Camera]:
    """Build a preset by name; unset options keep the preset defaults."""
    try:
        builder = SCENES[name]
    except KeyError:
        raise ValueError(f"unknown scene {name!r}; choose from {', '.join(sorted(SCENES))}") from None
    return builder(**{k: v for k, v in options.items() if v is not None})
