"""Main entry point for the task manager.

Wires settings, logging, the store and the repository into one session.
"""
import logging
from pathlib import Path
from typing import Optional

import click

from taskmanager.cli import CLI
from taskmanager.config import get_settings
from taskmanager.logging_setup import setup_logging
from taskmanager.repository import TaskRepository
from taskmanager.storage import Storage

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="JSON file holding tasks and preferences (env: TASKMGR_DATA_FILE).")
@click.option("--log-level", default=None,
              help="Console log level, e.g. INFO or DEBUG (env: TASKMGR_LOG_LEVEL).")
def main(data_file: Optional[Path], log_level: Optional[str]) -> None:
    """Interactive, file-backed to-do list."""
    settings = get_settings().with_overrides(data_file=data_file, log_level=log_level)
    setup_logging(console_level=settings.log_level, log_file=settings.log_file)
    logger.debug("Using data file %s", settings.data_file)
    storage = Storage(settings.data_file)
    repository = TaskRepository(storage.load())
    CLI(repository, storage).run()


if __name__ == "__main__":
    main()
