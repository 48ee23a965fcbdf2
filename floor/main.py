"""Entry point for the floor manager Textual app."""

from __future__ import annotations

import logging
from pathlib import Path

from floor.config import LOG_LEVEL, LOG_PATH, SEED_TABLE_COUNT
from floor.data import seed_tables
from floor.floor_app import FloorApp
from floor.store import FloorStore

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str = LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Send log records to a file; the terminal belongs to the UI."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=log_file, level=level.upper(), format=_LOG_FORMAT)


def main() -> None:
    configure_logging()
    store = FloorStore(tables=seed_tables(SEED_TABLE_COUNT))
    logging.getLogger(__name__).info("app_start tables=%d", len(store.tables))
    FloorApp(store).run()


if __name__ == "__main__":
    main()
