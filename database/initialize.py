from __future__ import annotations

import argparse
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

# The models import registers the reference cache table with SQLAlchemy's metadata.
from database import models  # noqa: F401
from database.session import Base, create_db_engine, engine as default_engine
from utils.logger import get_logger, setup_logger

logger = get_logger()


def init_database(*, bind: Engine | None = None, drop_existing: bool = False) -> None:
    """Create the reference cache schema on the given (or configured) engine."""
    bind = bind or default_engine
    try:
        if drop_existing:
            logger.warning("Dropping the reference cache before re-creating it.")
            Base.metadata.drop_all(bind=bind)
        Base.metadata.create_all(bind=bind)
    except SQLAlchemyError as exc:
        logger.exception("Failed to initialise reference cache schema: %s", exc)
        raise
    else:
        logger.info("Reference cache schema ready on %s", bind.url)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Initialise the reference cache schema for the IEV source parser."
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL to use instead of DATABASE_URL.",
    )
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop the cache table before creating the schema.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    setup_logger()
    args = _parse_args(argv)
    bind = create_db_engine(args.database_url) if args.database_url else None
    init_database(bind=bind, drop_existing=args.drop_existing)


if __name__ == "__main__":
    main()
