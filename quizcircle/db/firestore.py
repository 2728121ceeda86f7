import os, json, base64, pathlib
from functools import lru_cache

from google.cloud import firestore
from google.oauth2 import service_account

from quizcircle.core.config import settings


@lru_cache(maxsize=1)
def get_db() -> firestore.Client:
    """Create the Firestore client once, safely in any env."""
    project = os.getenv("GOOGLE_CLOUD_PROJECT") or settings.GOOGLE_CLOUD_PROJECT or None

    # 1) Prefer base64 secret if present
    key_b64 = os.getenv("FIREBASE_KEY_B64") or settings.FIREBASE_KEY_B64
    if key_b64:
        creds = service_account.Credentials.from_service_account_info(
            json.loads(base64.b64decode(key_b64))
        )
        return firestore.Client(project=project or creds.project_id, credentials=creds)

    # 2) Otherwise use a file path from env or settings
    path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or settings.GOOGLE_APPLICATION_CREDENTIALS
    if path and pathlib.Path(path).exists():
        creds = service_account.Credentials.from_service_account_file(path)
        return firestore.Client(project=project or creds.project_id, credentials=creds)

    # 3) Fall back to ADC (`gcloud auth application-default login` locally)
    return firestore.Client(project=project)
