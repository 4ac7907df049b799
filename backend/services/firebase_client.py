"""
Firebase Admin handles: one app per process, clients built explicitly and handed to services.

Services receive the Firestore client / storage bucket as constructor arguments
instead of reaching for firebase_admin globals, so tests can pass fakes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import firebase_admin
from firebase_admin import credentials, firestore, storage

logger = logging.getLogger(__name__)


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("[firebase] could not read %s: %s", path, e)
        return None
    return data.get("project_id") or data.get("projectId")


def get_firebase_app(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
    storage_bucket: Optional[str] = None,
) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    if firebase_admin._apps:
        return firebase_admin.get_app()
    project_id = project_id or (
        _project_id_from_credentials_file(credentials_path) if credentials_path else None
    )
    options = {}
    if project_id:
        options["projectId"] = project_id
    if storage_bucket:
        options["storageBucket"] = storage_bucket
    if credentials_path:
        cred = credentials.Certificate(str(Path(credentials_path).resolve()))
        app = firebase_admin.initialize_app(cred, options or None)
    else:
        app = firebase_admin.initialize_app(options=options or None)
    logger.info("[firebase] app initialized (project=%s)", project_id or "inferred")
    return app


def create_firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> Any:
    """Firestore client bound to the default Firebase app."""
    app = get_firebase_app(project_id=project_id, credentials_path=credentials_path)
    return firestore.client(app)


def create_storage_bucket(
    bucket_name: Optional[str] = None,
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> Any:
    """Cloud Storage bucket (the app's default bucket when bucket_name is None)."""
    app = get_firebase_app(
        project_id=project_id,
        credentials_path=credentials_path,
        storage_bucket=bucket_name,
    )
    return storage.bucket(bucket_name, app=app)
