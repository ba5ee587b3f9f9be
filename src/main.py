# main.py
import argparse
import logging
import sys

from geometry.bvh import BVHNode
from renderer.config import OVERRIDES, RenderOverrides
from renderer.errors import BackendUnavailableError, RenderOutputError
from renderer.gpu import pack_camera_block, pack_scene, probe_cuda
from renderer.image_io import write_ppm
from renderer.raytracer import Renderer
from scenes import SCENES

logger = logging.getLogger("main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Path trace a built-in scene and write it to stdout as a PPM image.")
    parser.add_argument("scene", nargs="?", default="cornell_box", choices=sorted(SCENES),
                        help="scene to render (default: cornell_box)")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--spp", type=int, help="samples per pixel")
    parser.add_argument("--max-depth", type=int, help="maximum bounces per path")
    parser.add_argument("--workers", type=int, help="worker processes (default: CPU count)")
    parser.add_argument("--seed", type=int, help="fix the random streams for a reproducible image")
    parser.add_argument("--backend", choices=("cpu", "cuda"), default="cpu",
                        help="compute backend; cuda falls back to cpu when unavailable")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-row progress")
    return parser.parse_args(argv)


def select_backend(name: str, world, camera, seed) -> str:
    """Returns the backend actually used. Only the CPU renderer ships."""
    if name == "cpu":
        return "cpu"
    try:
        device = probe_cuda()
    except BackendUnavailableError as e:
        logger.warning("CUDA backend unavailable (%s), falling back to CPU", e)
        return "cpu"

    try:
        scene = pack_scene(world)
    except ValueError as e:
        logger.warning("Scene cannot run on CUDA device %s (%s), falling back to CPU", device, e)
        return "cpu"

    block = pack_camera_block(camera, seed or 0, len(scene["spheres"]))
    logger.warning("CUDA device %s found but no GPU kernels are bundled, rendering on CPU "
                   "(%d spheres, %dx%d packed)", device, len(scene["spheres"]),
                   int(block["params_f"][1]), int(block["params_f"][2]))
    return "cpu"


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    world, lights, camera = SCENES[args.scene]()
    OVERRIDES.apply(camera)
    try:
        cli = RenderOverrides.from_mapping({
            "image_width": args.width,
            "samples_per_pixel": args.spp,
            "max_depth": args.max_depth,
        })
        cli.apply(camera)
        renderer = Renderer(workers=args.workers, seed=args.seed)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    world = BVHNode.from_list(world)
    select_backend(args.backend, world, camera, args.seed)

    pixels = renderer.render(world, lights, camera)
    try:
        write_ppm(pixels, sys.stdout)
    except RenderOutputError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
