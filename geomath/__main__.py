#!/usr/bin/env python3
"""
geomath command line front end.

Computes great-circle distances, intermediate points and path measurements
for points written as "(lat,lng)" or "POINT(lng lat)".
"""
import argparse
import logging
import sys
from typing import List, Optional, TextIO

from geomath import __version__, configure_logging
from geomath.core.errors import GeomathError
from geomath.geos import geospatial
from geomath.geos.constants import DEFAULT_DIAMETER_OF_THE_EARTH_IN_M
from geomath.geos.point import GeospatialPoint

logger = logging.getLogger("geomath")

FORMATS = ("internal", "gis", "dms")


def render(point: GeospatialPoint, fmt: str) -> str:
    """Render a point in one of the supported text formats."""
    if fmt == "gis":
        return point.gis()
    if fmt == "dms":
        return point.dms()
    return str(point)


def read_path(stream: TextIO) -> List[GeospatialPoint]:
    """Read one point per line, skipping blank lines and '#' comments."""
    path = []
    for line in stream:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        path.append(GeospatialPoint.parse(line))
    logger.debug("Read a path of %d points", len(path))
    return path


def _read_path_argument(filename: Optional[str]) -> List[GeospatialPoint]:
    if filename is None or filename == "-":
        return read_path(sys.stdin)
    with open(filename, "r", encoding="utf-8") as f:
        return read_path(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="geomath", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debugging output")
    commands = parser.add_subparsers(dest="command", required=True)

    def add_diameter(p: argparse.ArgumentParser) -> None:
        p.add_argument("--diameter", type=float, default=DEFAULT_DIAMETER_OF_THE_EARTH_IN_M,
                       help="value of R in metres (default: %(default)s)")

    def add_format(p: argparse.ArgumentParser) -> None:
        p.add_argument("--format", choices=FORMATS, default="internal",
                       help="output format (default: %(default)s)")

    p = commands.add_parser("distance", help="haversine distance between two points, in metres")
    p.add_argument("p1")
    p.add_argument("p2")
    add_diameter(p)

    p = commands.add_parser("intermediate", help="point at a fraction of the way from P1 to P2")
    p.add_argument("p1")
    p.add_argument("p2")
    p.add_argument("fraction", type=float)
    add_diameter(p)
    add_format(p)

    p = commands.add_parser("path-length", help="length of a path read one point per line")
    p.add_argument("file", nargs="?", help="path file (default: standard input)")
    add_diameter(p)

    p = commands.add_parser("path-point", help="point at a fraction of the way along a path")
    p.add_argument("fraction", type=float)
    p.add_argument("file", nargs="?", help="path file (default: standard input)")
    add_diameter(p)
    add_format(p)

    p = commands.add_parser("convert", help="re-render a point in another format")
    p.add_argument("point")
    add_format(p)

    return parser


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the text to print."""
    if args.command == "distance":
        d = geospatial.distance(GeospatialPoint.parse(args.p1), GeospatialPoint.parse(args.p2),
                                args.diameter)
        return repr(d)
    if args.command == "intermediate":
        p = geospatial.intermediate_point(GeospatialPoint.parse(args.p1), GeospatialPoint.parse(args.p2),
                                          args.fraction, args.diameter)
        return render(p, args.format)
    if args.command == "path-length":
        return repr(geospatial.path_length(_read_path_argument(args.file), args.diameter))
    if args.command == "path-point":
        p = geospatial.path_intermediate_point(_read_path_argument(args.file), args.fraction,
                                               args.diameter)
        return render(p, args.format)
    if args.command == "convert":
        return render(GeospatialPoint.parse(args.point), args.format)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the command line front end."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        print(run(args))
    except (GeomathError, OSError) as e:
        logger.error("%s: %s", args.command, e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
