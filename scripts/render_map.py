#!/usr/bin/env python3
"""Fetch every route and write a standalone HTML map.

Usage
-----
Point the script at a running backend and run::

    export RUTAS_API_URL="http://localhost:3000"
    python scripts/render_map.py --out rutas.html

Options::

    --out FILE          HTML file to write (default: rutas.html)
    --hide ID           Hide a route (repeatable)
    --focus ID          Fit the viewport to this route
    --highlight ID      Draw this route highlighted
    --search TEXT       Print only the routes matching TEXT
    --locate            Request the user's location and mark it
    --verbose           DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrutas import FoliumMapSurface, RutasClient, RutasConfig, RutasError  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the route map to HTML.")
    parser.add_argument("--out", default="rutas.html", help="HTML file to write")
    parser.add_argument("--hide", type=int, action="append", default=[], metavar="ID", help="Hide a route")
    parser.add_argument("--focus", type=int, metavar="ID", help="Fit the viewport to this route")
    parser.add_argument("--highlight", type=int, metavar="ID", help="Highlight this route")
    parser.add_argument("--search", default="", metavar="TEXT", help="Filter the printed route list")
    parser.add_argument("--locate", action="store_true", help="Mark the user's location")
    parser.add_argument("--verbose", action="store_true", help="DEBUG logging")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    config = RutasConfig.from_env()
    surface = FoliumMapSurface(config)

    async with RutasClient(config, on_notice=lambda msg: print(f"! {msg}", file=sys.stderr)) as client:
        client.attach_surface(surface)

        report = await client.load_routes()
        if not report.ok:
            return 1
        for rejected in report.rejected:
            print(f"skipped route {rejected.route_id}: {rejected.reason}", file=sys.stderr)

        for route_id in args.hide:
            client.set_route_visible(route_id, False)
        if args.highlight is not None:
            client.hover(args.highlight)
        if args.locate:
            await client.locate_me()
        if args.focus is not None:
            client.focus_route(args.focus)

        for row in client.search(args.search):
            mark = "x" if row.visible else " "
            print(f"[{mark}] {row.id:>4}  {row.name}  {row.fare}  {row.schedule}")
            if row.shows_description:
                print(f"        passes through: {row.description}")

        path = surface.save(args.out)

    print(f"Wrote {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except RutasError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
