import argparse
import logging
import math
import sys
from pathlib import Path

from bluenoise.areas import circle, rectangle
from bluenoise.ascii_map import AsciiMap
from bluenoise.common import AreaFn, Point
from bluenoise.config import load_config
from bluenoise.errors import PoissonDiscError
from bluenoise.nearest_neighbors import NearestNeighbors
from bluenoise.poisson import PoissonDiscConfig, poisson_disc_distribution
from bluenoise.sources import uniform_source

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bluenoise", description="Poisson disc sampling demo")
    ap.add_argument("--config", type=Path, help="JSON file with sampler settings")
    ap.add_argument("--width", type=float, help="region width (default 80)")
    ap.add_argument("--height", type=float, help="region height (default 40)")
    ap.add_argument("--min-distance", type=float, help="minimum point spacing (default 4)")
    ap.add_argument("--max-attempts", type=int, help="candidates per active point")
    ap.add_argument("--start", type=float, nargs=2, metavar=("X", "Y"), help="first point")
    ap.add_argument("--seed", type=int, default=None, help="RNG seed")
    ap.add_argument("--shape", choices=("rect", "circle"), default="rect")
    ap.add_argument("--stats", action="store_true", help="print nearest neighbour statistics")
    ap.add_argument("--view", action="store_true", help="open the pygame viewer")
    ap.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)
    return ap


def resolve_config(args: argparse.Namespace) -> PoissonDiscConfig:
    if args.config is not None:
        cfg = load_config(args.config)
    else:
        cfg = PoissonDiscConfig(width=80, height=40, min_distance=4.0)

    if args.width is not None:
        cfg.width = args.width
    if args.height is not None:
        cfg.height = args.height
    if args.min_distance is not None:
        cfg.min_distance = args.min_distance
    if args.max_attempts is not None:
        cfg.max_attempts = args.max_attempts
    if args.start is not None:
        cfg.start = Point(*args.start)
    return cfg


def area_for(shape: str, cfg: PoissonDiscConfig) -> AreaFn:
    if shape == "circle":
        return circle(cfg.width / 2, cfg.height / 2, min(cfg.width, cfg.height) / 2, cfg.width, cfg.height)
    return rectangle(cfg.width, cfg.height)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        cfg = resolve_config(args)
        cfg.validate()
        in_area = area_for(args.shape, cfg)

        if args.view:
            from bluenoise.viewer import PoissonViewer
            PoissonViewer(cfg, in_area, seed=args.seed or 0).run()
            return 0

        ascii_map = AsciiMap(int(math.ceil(cfg.width)), int(math.ceil(cfg.height)))
        points: list[Point] = []

        def output(p: Point) -> None:
            points.append(p)
            ascii_map.plot(p)

        poisson_disc_distribution(cfg, uniform_source(args.seed), in_area, output)
    except PoissonDiscError as e:
        logger.debug("sampling failed", exc_info=True)
        print(f"bluenoise: {e}", file=sys.stderr)
        return 1

    print(ascii_map.render())
    if args.stats:
        s = NearestNeighbors([p.as_tuple() for p in points]).stats()
        print(f"points={s.count} nn_min={s.min:.4f} nn_max={s.max:.4f} nn_mean={s.mean:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
