from __future__ import annotations

"""Configuration helpers.

Handles loading of a .env file and reading the settings used by the CLI.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv


DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_VAULT_PATH = "~/.justswing/vault.json"
DEFAULT_FIRESTORE_COLLECTION = "justswing"
DEFAULT_MAX_VIDEO_MB = 30


def load_env() -> None:
    """Load environment variables from a .env file in the working directory."""
    load_dotenv()


def get_required_env(key: str) -> str:
    """Get a required environment variable or raise a helpful error.

    Args:
        key: The environment variable name to retrieve.

    Returns:
        The environment variable value.

    Raises:
        RuntimeError: If the environment variable is not set.
    """
    value: Optional[str] = os.getenv(key)
    if not value:
        raise RuntimeError(f"Required environment variable not set: {key}")
    return value


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    store_backend: str = "file"
    vault_path: Path = Path(DEFAULT_VAULT_PATH).expanduser()
    firebase_project_id: Optional[str] = None
    firestore_collection: str = DEFAULT_FIRESTORE_COLLECTION
    max_video_mb: int = DEFAULT_MAX_VIDEO_MB


def load_settings() -> Settings:
    """Build settings from the environment (call load_env first for .env support)."""
    backend = os.getenv("JUSTSWING_STORE", "file").strip().lower()
    if backend not in ("file", "firestore"):
        raise RuntimeError(f"Unsupported JUSTSWING_STORE backend: {backend}")

    return Settings(
        model=os.getenv("JUSTSWING_MODEL", DEFAULT_MODEL),
        store_backend=backend,
        vault_path=Path(os.getenv("JUSTSWING_VAULT_PATH", DEFAULT_VAULT_PATH)).expanduser(),
        firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
        firestore_collection=os.getenv("JUSTSWING_FIRESTORE_COLLECTION", DEFAULT_FIRESTORE_COLLECTION),
        max_video_mb=int(os.getenv("JUSTSWING_MAX_VIDEO_MB", DEFAULT_MAX_VIDEO_MB)),
    )
