"""
CLI for inspecting and editing the favorites collection.

Goes through the same catalog service as the API, so the same validation and
uniqueness rules apply. Only the ``search`` command needs OMDB_API_KEY.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from movie_catalog.settings import get_settings
from movie_catalog import logging_setup
from movie_catalog.exceptions import CatalogError, MissingCredentialError
from movie_catalog.models import Movie
from movie_catalog.adapters.omdb.omdb import OMDb_API
from api.repositories.local import LocalFileRepository
from api.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def _format_movie(movie: Movie, is_favorite: Optional[bool] = None) -> str:
    marker = ""
    if is_favorite is not None:
        marker = "* " if is_favorite else "  "
    year = f" ({movie.year})" if movie.year else ""
    return f"{marker}{movie.imdb_id}  {movie.title}{year}"


def build_parser() -> argparse.ArgumentParser:
    cfg = get_settings()

    parser = argparse.ArgumentParser(
        description="Manage the favorite movies list."
    )
    parser.add_argument(
        "--favorites",
        type=Path,
        default=cfg.favorites_path,
        help="Path to the favorites JSON file."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List favorites, one page at a time.")
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--page-size", type=int, default=cfg.default_page_size)

    add_parser = subparsers.add_parser("add", help="Add a movie to favorites.")
    add_parser.add_argument("--imdb-id", required=True)
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--year", default="")
    add_parser.add_argument("--poster", default="")

    remove_parser = subparsers.add_parser("remove", help="Remove a movie from favorites.")
    remove_parser.add_argument("imdb_id")

    search_parser = subparsers.add_parser("search", help="Search OMDb (favorites are starred).")
    search_parser.add_argument("title")
    search_parser.add_argument("--page", type=int, default=1)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging_setup.setup_logging(args.log_level)

    try:
        repository = LocalFileRepository(args.favorites)
        gateway = OMDb_API() if args.command == "search" else None
        service = CatalogService(
            search_gateway=gateway,
            favorites=repository,
            max_page_size=get_settings().max_page_size,
        )

        if args.command == "list":
            page = service.get_favorites(args.page, args.page_size)
            for movie in page.items:
                print(_format_movie(movie))
            print(
                f"Page {page.current_page}/{page.total_pages} "
                f"({page.count} shown, {page.total_results} total)"
            )

        elif args.command == "add":
            movie = service.add_to_favorites(Movie(
                title=args.title,
                imdb_id=args.imdb_id,
                year=args.year,
                poster=args.poster,
            ))
            print(f"Added: {_format_movie(movie)}")

        elif args.command == "remove":
            movie = service.remove_from_favorites(args.imdb_id)
            print(f"Removed: {_format_movie(movie)}")

        elif args.command == "search":
            result = service.search_movies(args.title, args.page)
            for hit in result.movies:
                print(_format_movie(hit.movie, is_favorite=hit.is_favorite))
            print(f"{len(result.movies)} shown, {result.total_results} total")

    except CatalogError as e:
        logger.error(f"{args.command} failed: {e.message}")
        print(f"Error ({e.kind.value}): {e.message}")
        return 1
    except MissingCredentialError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
