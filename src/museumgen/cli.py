from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import load_params
from .errors import LibraryLoadError, MuseumGenError
from .generator import generate
from .library.loader import default_content, default_library, load_content, load_library
from .logging_config import configure_logging
from .render import render_occupancy

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="museumgen",
        description="Generate a museum layout from room templates and fill its galleries.",
    )
    parser.add_argument("--library", type=Path, default=None,
                        help="Module template library (JSON or YAML). Defaults to the bundled museum wing.")
    parser.add_argument("--content", type=Path, default=None,
                        help="Gallery content library (JSON or YAML). Defaults to the bundled pieces.")
    parser.add_argument("--params", dest="params_path", type=Path, default=None,
                        help="YAML file overriding the default generation parameters.")
    parser.add_argument("--seed", default=None, help="Integer or string seed. Random if omitted.")
    parser.add_argument("--rooms", type=int, default=None, help="Total room count including the spawn room.")
    parser.add_argument("--cap-all", action="store_true",
                        help="Cap every leftover connector even if that exceeds --rooms "
                             "(same as cap_within_room_budget: false).")
    parser.add_argument("--render", action="store_true", help="Print an occupancy map after the JSON summary.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def _coerce_seed(raw):
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        params = load_params(
            args.params_path,
            room_count=args.rooms,
            cap_within_room_budget=False if args.cap_all else None,
        )
        library = load_library(args.library) if args.library else default_library()
        content = load_content(args.content) if args.content else default_content()
        result = generate(library, params, seed=_coerce_seed(args.seed), content=content)
    except (MuseumGenError, ValidationError) as e:
        logger.error("Generation failed: %s", e)
        print(e.to_human() if isinstance(e, LibraryLoadError) else str(e), file=sys.stderr)
        return 1

    # Print JSON summary so it can be diffed across runs
    print(json.dumps(result.to_dict(), indent=2, sort_keys=True))
    if args.render:
        print()
        print(render_occupancy(result.occupied))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
