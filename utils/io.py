from __future__ import annotations

"""I/O utilities.

JSON blob helpers for the key-value stores and video loading for the CLI.
"""

from pathlib import Path
from typing import Any, Tuple, Union
import json
import mimetypes


PathLike = Union[str, Path]

BYTES_PER_MB = 1024 * 1024


class VideoValidationError(ValueError):
    """Raised when a video file cannot be sent for analysis."""


def load_json_file(path: PathLike) -> Any:
    """Load a JSON file.

    Args:
        path: Path to a JSON file.

    Returns:
        Parsed JSON value.
    """
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def dump_json_file(path: PathLike, data: Any) -> None:
    """Write JSON atomically (temp file + rename) so readers never see a partial write."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    tmp.replace(p)


def guess_video_mime_type(path: PathLike) -> str:
    mime_type, _ = mimetypes.guess_type(str(path))
    if mime_type is None and Path(path).suffix.lower() in (".mov", ".webm", ".mkv"):
        # mimetypes tables differ between platforms for these containers
        mime_type = {
            ".mov": "video/quicktime",
            ".webm": "video/webm",
            ".mkv": "video/x-matroska",
        }[Path(path).suffix.lower()]
    return mime_type or "application/octet-stream"


def load_video(path: PathLike, max_mb: int = 30) -> Tuple[bytes, str]:
    """Read a swing video and return its bytes and mime type.

    Args:
        path: Video file path.
        max_mb: Largest accepted file size in megabytes.

    Raises:
        FileNotFoundError: If the file does not exist.
        VideoValidationError: If the file is not a video or is too large.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)

    mime_type = guess_video_mime_type(p)
    if not mime_type.startswith("video/"):
        raise VideoValidationError(f"Please upload a video file (got {mime_type}).")

    size = p.stat().st_size
    if size > max_mb * BYTES_PER_MB:
        raise VideoValidationError(
            f"File too large. Please keep clips under {max_mb}MB for AI processing."
        )

    return p.read_bytes(), mime_type
