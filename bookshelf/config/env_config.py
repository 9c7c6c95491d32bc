"""
Environment configuration loader for the bookshelf persistence layer
Loads store settings from the environment and an optional .env file
"""

import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from bookshelf.common.errors import ConfigurationError
from bookshelf.services.store.factory import SUPPORTED_BACKENDS
from bookshelf.services.system.logger_service import get_logger

logger = get_logger(__name__)

DEFAULT_DATABASE_USE = 'memory'
# None targets the Firestore (default) database
DEFAULT_DATABASE_NAME = None
DEFAULT_BOOKS_COLLECTION = 'books'


def load_env_file(env_path: Optional[str] = None) -> bool:
    """
    Load variables from a .env file into the process environment.
    Values already present in the environment win.

    Args:
        env_path: Path to .env file (default: search from the working directory)

    Returns:
        True if a file was found and loaded
    """
    loaded = load_dotenv(dotenv_path=env_path or find_dotenv(usecwd=True), override=False)
    if not loaded:
        logger.debug("No .env file found", extra={"path": env_path})
    return loaded


def get_store_config(env_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Get document store configuration from environment

    Returns:
        Dictionary with database_use, database_name and books_collection

    Raises:
        ConfigurationError: BOOKSHELF_DATABASE_USE names an unknown backend
    """
    load_env_file(env_path)

    database_use = os.getenv('BOOKSHELF_DATABASE_USE', DEFAULT_DATABASE_USE).strip().lower()
    if database_use not in SUPPORTED_BACKENDS:
        raise ConfigurationError(
            f"BOOKSHELF_DATABASE_USE must be one of {', '.join(SUPPORTED_BACKENDS)}, got '{database_use}'"
        )

    config = {
        'database_use': database_use,
        'database_name': os.getenv('BOOKSHELF_DATABASE_NAME') or DEFAULT_DATABASE_NAME,
        'books_collection': os.getenv('BOOKSHELF_BOOKS_COLLECTION') or DEFAULT_BOOKS_COLLECTION,
    }

    logger.info("Store configuration loaded", extra={"config": config})
    return config
