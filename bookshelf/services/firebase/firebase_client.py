"""Shared Firebase initialization helper."""
from __future__ import annotations

import os
import threading
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from bookshelf.common.errors import ConfigurationError
from bookshelf.services.system.logger_service import get_logger, log_error

logger = get_logger(__name__)

# Thread-safe initialization lock
_firebase_init_lock = threading.Lock()


def _service_account_from_env() -> Optional[dict]:
    project_id = os.getenv("FIREBASE_PROJECT_ID")
    client_email = os.getenv("FIREBASE_CLIENT_EMAIL")
    private_key = os.getenv("FIREBASE_PRIVATE_KEY")
    if not (project_id and client_email and private_key):
        return None
    return {
        "type": "service_account",
        "project_id": project_id,
        "private_key_id": os.getenv("FIREBASE_PRIVATE_KEY_ID", ""),
        "private_key": private_key.replace("\\n", "\n"),
        "client_email": client_email,
        "client_id": os.getenv("FIREBASE_CLIENT_ID", ""),
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
        "client_x509_cert_url": f"https://www.googleapis.com/robot/v1/metadata/x509/{client_email}"
    }


def initialize_firebase() -> Any:
    """Initialize the Firebase Admin SDK once and return the default app.

    Credentials come from the FIREBASE_* environment variables, falling back to
    application default credentials.
    """
    with _firebase_init_lock:
        if firebase_admin._apps:
            return firebase_admin.get_app()

        service_account = _service_account_from_env()
        try:
            if service_account:
                logger.info("Initializing Firebase with environment variables")
                return firebase_admin.initialize_app(credentials.Certificate(service_account))
            logger.info("Initializing Firebase with application default credentials")
            return firebase_admin.initialize_app()
        except (ValueError, OSError) as e:
            log_error(logger, e, context={"service": "firebase", "operation": "initialize"})
            raise ConfigurationError(f"Firebase initialization failed: {e}") from e


def get_firestore_client(database_id: Optional[str] = None) -> Any:
    """Return a Firestore client bound to the given database (default database when None)."""
    app = initialize_firebase()
    if database_id:
        return firestore.client(app=app, database_id=database_id)
    return firestore.client(app=app)
