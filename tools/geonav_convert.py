#!/usr/bin/env python3
"""
Offline geodetic <-> UTM / local xy conversion for CSV logs.

Uses the same projection as the geonav_transform node, so positions computed
here match what the node publishes on odometry/utm and odometry/odom.

Modes:
  ll2utm  latitude, longitude        -> easting, northing, zone
  utm2ll  easting, northing, zone    -> latitude, longitude
  ll2xy   latitude, longitude        -> x, y   (meters from --origin)
  xy2ll   x, y                       -> latitude, longitude

Input CSV must have a header naming the input columns; other columns are
copied through. Rows that cannot be converted are reported on stderr and
written with empty output columns.

Usage:
  python tools/geonav_convert.py ll2utm fixes.csv -o fixes_utm.csv
  python tools/geonav_convert.py ll2xy fixes.csv --origin 45.0 -93.0
  python tools/geonav_convert.py point 45.0 -93.0
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from geonav_transform.common.errors import ProjectionBoundaryError
from geonav_transform.common.utm import ll_to_xy, project, unproject, xy_to_ll


MODES = {
    "ll2utm": (("latitude", "longitude"), ("easting", "northing", "zone")),
    "utm2ll": (("easting", "northing", "zone"), ("latitude", "longitude")),
    "ll2xy": (("latitude", "longitude"), ("x", "y")),
    "xy2ll": (("x", "y"), ("latitude", "longitude")),
}
NEEDS_ORIGIN = ("ll2xy", "xy2ll")


def convert_row(
    mode: str,
    row: Dict[str, str],
    origin: Optional[Tuple[float, float]] = None,
) -> Dict[str, object]:
    """
    Convert one CSV row. Returns only the output columns.

    Raises:
        KeyError: Missing input column
        ValueError: Unparseable value or point outside the UTM band
    """
    if mode == "ll2utm":
        p = project(float(row["latitude"]), float(row["longitude"]))
        return {"easting": p.easting, "northing": p.northing, "zone": p.zone}
    if mode == "utm2ll":
        lat, lon = unproject(float(row["easting"]), float(row["northing"]), row["zone"])
        return {"latitude": lat, "longitude": lon}
    if origin is None:
        raise ValueError(f"mode {mode} requires an origin")
    if mode == "ll2xy":
        x, y = ll_to_xy(float(row["latitude"]), float(row["longitude"]), *origin)
        return {"x": x, "y": y}
    if mode == "xy2ll":
        lat, lon = xy_to_ll(float(row["x"]), float(row["y"]), *origin)
        return {"latitude": lat, "longitude": lon}
    raise ValueError(f"unknown mode: {mode}")


def convert_rows(
    mode: str,
    rows: Iterable[Dict[str, str]],
    origin: Optional[Tuple[float, float]] = None,
) -> Tuple[List[Dict[str, object]], List[str]]:
    """Convert all rows; failures leave output columns empty and are listed in errors."""
    _, out_cols = MODES[mode]
    converted = []
    errors = []
    for i, row in enumerate(rows, start=1):
        merged: Dict[str, object] = dict(row)
        try:
            merged.update(convert_row(mode, row, origin))
        except (KeyError, ValueError) as exc:
            errors.append(f"row {i}: {exc}")
            merged.update({c: "" for c in out_cols})
        converted.append(merged)
    return converted, errors


def _write_csv(rows: List[Dict[str, object]], fieldnames: List[str], out) -> None:
    writer = csv.DictWriter(out, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)


def _run_point(args) -> int:
    try:
        p = project(args.lat, args.lon)
    except ProjectionBoundaryError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    print(f"{p.easting:.3f} {p.northing:.3f} {p.zone}")
    return 0


def _run_csv(args) -> int:
    input_path = Path(args.input_csv)
    if not input_path.exists():
        print(f"ERROR: {input_path} not found", file=sys.stderr)
        return 1

    origin = tuple(args.origin) if args.origin else None
    if args.mode in NEEDS_ORIGIN and origin is None:
        print(f"ERROR: mode {args.mode} requires --origin LAT LON", file=sys.stderr)
        return 1

    with input_path.open(newline="") as f:
        reader = csv.DictReader(f)
        in_fields = list(reader.fieldnames or [])
        missing = [c for c in MODES[args.mode][0] if c not in in_fields]
        if missing:
            print(f"ERROR: missing input columns: {', '.join(missing)}", file=sys.stderr)
            return 1
        rows, errors = convert_rows(args.mode, reader, origin)

    fieldnames = in_fields + [c for c in MODES[args.mode][1] if c not in in_fields]
    if args.output:
        with open(args.output, "w", newline="") as out:
            _write_csv(rows, fieldnames, out)
        print(f"Wrote {len(rows)} rows to {args.output}")
    else:
        _write_csv(rows, fieldnames, sys.stdout)

    for msg in errors:
        print(f"WARNING: {msg}", file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Convert between geodetic, UTM and local xy coordinates.")
    sub = ap.add_subparsers(dest="mode", required=True)

    point = sub.add_parser("point", help="Project a single latitude/longitude to UTM")
    point.add_argument("lat", type=float)
    point.add_argument("lon", type=float)

    for mode, (in_cols, out_cols) in MODES.items():
        p = sub.add_parser(mode, help=f"({', '.join(in_cols)}) -> ({', '.join(out_cols)})")
        p.add_argument("input_csv", help=f"Input CSV with columns: {', '.join(in_cols)}")
        p.add_argument("-o", "--output", default=None, help="Output CSV path (default: stdout)")
        p.add_argument(
            "--origin",
            nargs=2,
            type=float,
            metavar=("LAT", "LON"),
            default=None,
            help="Local frame origin (ll2xy / xy2ll)",
        )

    args = ap.parse_args(argv)
    if args.mode == "point":
        return _run_point(args)
    return _run_csv(args)


if __name__ == "__main__":
    sys.exit(main())
