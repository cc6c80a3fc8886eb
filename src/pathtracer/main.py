# main.py
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pathtracer.camera.camera import Camera
from pathtracer.config import ConfigError, RenderSettings, load_config
from pathtracer.logging_config import setup_logging
from pathtracer.renderer.image import write_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES, build_scene

logger = logging.getLogger("pathtracer.main")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a preset scene with the Monte Carlo path tracer.",
    )
    parser.add_argument("scene", choices=sorted(SCENES), help="preset scene to render")
    parser.add_argument("-o", "--output", default="image.ppm",
                        help="output image; .ppm writes plain-text PPM, other suffixes go through Pillow")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--spp", type=int, dest="samples_per_pixel", help="samples per pixel")
    parser.add_argument("--max-depth", type=int, help="maximum path depth")
    parser.add_argument("--seed", type=int, help="random seed for a reproducible image")
    parser.add_argument("--workers", type=int, help="number of rendering processes")
    parser.add_argument("--russian-roulette", action="store_true", default=None,
                        help="terminate low-contribution paths early")
    parser.add_argument("--stratified", action="store_true", default=None,
                        help="stratify pixel samples on a grid")
    parser.add_argument("--obj", help="OBJ file for the mesh scene")
    parser.add_argument("--config", help="JSON file with render settings and a camera section")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", help="also log to this rotating file")
    return parser

def resolve_settings(args: argparse.Namespace, file_config: Dict[str, Any]) -> RenderSettings:
    """File values first, then command line flags on top."""
    values = {k: v for k, v in file_config.items() if k != "camera"}
    settings = RenderSettings.from_mapping(values)
    return settings.replace(
        samples_per_pixel=args.samples_per_pixel,
        max_depth=args.max_depth,
        seed=args.seed,
        workers=args.workers,
        russian_roulette=args.russian_roulette,
        stratified=args.stratified,
    )

def resolve_camera(camera: Camera, args: argparse.Namespace, file_config: Dict[str, Any]) -> Camera:
    camera_config = file_config.get("camera", {})
    if not isinstance(camera_config, dict):
        raise ConfigError("the camera section must be a JSON object")
    if not camera_config and args.width is None:
        return camera
    params = camera.to_dict()
    unknown = set(camera_config) - set(params)
    if unknown:
        raise ConfigError(f"unknown camera settings: {', '.join(sorted(unknown))}")
    params.update(camera_config)
    if args.width is not None:
        params["image_width"] = args.width
    return Camera(**params)

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        file_config = load_config(args.config) if args.config else {}
        settings = resolve_settings(args, file_config)
        scene, camera = build_scene(args.scene, obj=args.obj)
        camera = resolve_camera(camera, args, file_config)
        renderer = Renderer(scene, camera, settings)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 2

    logger.info("Scene %r: %d primitives, %d lights",
                args.scene, len(scene.primitives), len(scene.lights))
    image = renderer.render()
    write_image(Path(args.output), image)
    return 0

if __name__ == "__main__":
    sys.exit(main())
