#!/usr/bin/env python3
"""
Firestore-backed key-value store for the JustSwing vault.

Keeps a cloud copy of the same three blobs the local vault holds (drill
progress, skill profile, history). Each logical key is one document in a
single collection:

    <collection>/<key>  ->  {"value": "<json blob>", "updatedAt": <server time>}

Credentials resolve the same way as any firebase_admin app: an explicit
service account file, GOOGLE_APPLICATION_CREDENTIALS, or Application Default
Credentials.
"""

from __future__ import annotations

import os
from typing import Any, Optional

try:
    import firebase_admin
    from firebase_admin import credentials, firestore
except ImportError as exc:  # pragma: no cover - surface clearer message
    raise ImportError(
        f"Required Firebase dependencies not installed: {exc}\n"
        "Install with: pip install firebase-admin"
    ) from exc

from utils.kv_store import KeyValueStore


class FirestoreStore(KeyValueStore):
    """Stores vault blobs as Firestore documents."""

    def __init__(self, collection: str = "justswing",
                 project_id: Optional[str] = None,
                 service_account_path: Optional[str] = None,
                 db: Any = None) -> None:
        self.collection = collection
        self.project_id = project_id or os.getenv('FIREBASE_PROJECT_ID')

        if db is None:
            # Initialise Firebase Admin SDK once
            if not firebase_admin._apps:
                cred_path = service_account_path or os.getenv('GOOGLE_APPLICATION_CREDENTIALS')
                if cred_path and os.path.exists(cred_path):
                    cred = credentials.Certificate(cred_path)
                else:
                    cred = credentials.ApplicationDefault()
                firebase_admin.initialize_app(
                    cred, {'projectId': self.project_id} if self.project_id else None
                )
            db = firestore.client()
        self.db = db

    def _doc(self, key: str):
        return self.db.collection(self.collection).document(key)

    def get(self, key: str) -> Optional[str]:
        snap = self._doc(key).get()
        if not snap.exists:
            return None
        data = snap.to_dict() or {}
        return data.get('value')

    def set(self, key: str, value: str) -> None:
        self._doc(key).set({
            'value': value,
            'updatedAt': firestore.SERVER_TIMESTAMP,
        })

    def delete(self, key: str) -> None:
        self._doc(key).delete()
