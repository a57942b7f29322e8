from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from movie_lookup.config.host_config import TMDBConfig, load_host_config
from movie_lookup.domain.results import ApiError
from movie_lookup.infrastructure.tmdb_client import TMDBResolverClient

logger = logging.getLogger(__name__)

# command -> (client method, takes a query argument)
_COMMANDS: dict[str, tuple[str, bool]] = {
    "movie": ("get_movie", True),
    "movies": ("get_movies", True),
    "movie-id": ("get_movie_id", True),
    "similar": ("get_similar_movies", True),
    "upcoming": ("get_upcoming_movies", False),
    "trailers": ("get_trailers", True),
    "poster": ("get_poster", True),
    "person": ("get_person", True),
    "people": ("get_people", True),
    "person-id": ("get_person_id", True),
    "spooky": ("spooky", False),
}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Look up movies and people on TMDB.")
    p.add_argument(
        "--config",
        default=None,
        help="YAML host config carrying tokens.api.tmdb (default: TMDB_* env vars).",
    )
    sub = p.add_subparsers(dest="command", required=True)
    for name, (_, takes_query) in _COMMANDS.items():
        cmd = sub.add_parser(name)
        if takes_query:
            cmd.add_argument("query", help="Title/name, IMDb id (tt…/nm…) or TMDB id (t<digits>).")
        if name in {"movies", "people"}:
            cmd.add_argument("--page", type=int, default=1)
        if name == "poster":
            cmd.add_argument("--out", default=None, help="Write the poster image to this path.")
    return p


def _load_config(path: str | None) -> TMDBConfig | None:
    try:
        if path:
            return load_host_config(path)
        return TMDBConfig.from_settings()
    except ValidationError as exc:
        logger.error("TMDB config invalid (is the API key set?): %s", exc)
        return None


async def _call(client: TMDBResolverClient, args: argparse.Namespace) -> Any:
    method_name, takes_query = _COMMANDS[args.command]
    method = getattr(client, method_name)
    if not takes_query:
        return await method()
    if args.command in {"movies", "people"}:
        return await method(args.query, page=args.page)
    return await method(args.query)


async def _run(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    if config is None:
        return 2

    async with TMDBResolverClient(config=config) as client:
        result = await _call(client, args)

    if isinstance(result, ApiError):
        print(json.dumps(result.as_dict()))
        return 1

    if isinstance(result, bytes):
        if args.out:
            Path(args.out).write_bytes(result)
            logger.info("poster written: %s (%s bytes)", args.out, len(result))
        else:
            print(json.dumps({"poster_bytes": len(result)}))
        return 0

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = _build_parser().parse_args(argv)
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
