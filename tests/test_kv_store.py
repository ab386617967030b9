"""Vault stores, file helpers and settings."""

import json
from pathlib import Path

import pytest

from utils.config import DEFAULT_MODEL, get_required_env, load_settings
from utils.io import VideoValidationError, guess_video_mime_type, load_video
from utils.kv_store import ALL_KEYS, HISTORY_KEY, USER_PROFILE_KEY, InMemoryStore, JsonFileStore


class TestInMemoryStore:

    def test_get_set_delete(self):
        store = InMemoryStore()
        assert store.get(HISTORY_KEY) is None
        store.set(HISTORY_KEY, "[]")
        assert store.get(HISTORY_KEY) == "[]"
        store.delete(HISTORY_KEY)
        store.delete(HISTORY_KEY)
        assert store.get(HISTORY_KEY) is None

    def test_clear_removes_every_vault_key(self):
        store = InMemoryStore({key: "x" for key in ALL_KEYS})
        store.set("unrelated", "keep")
        store.clear()
        assert store.data == {"unrelated": "keep"}


class TestJsonFileStore:

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "vault.json").get(HISTORY_KEY) is None

    def test_values_survive_a_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "vault.json"
        JsonFileStore(path).set(USER_PROFILE_KEY, '{"overallLevel": "Beginner"}')
        JsonFileStore(path).set(HISTORY_KEY, "[]")

        store = JsonFileStore(path)
        assert store.get(USER_PROFILE_KEY) == '{"overallLevel": "Beginner"}'
        assert store.get(HISTORY_KEY) == "[]"
        assert not path.with_suffix(".json.tmp").exists()

    def test_hand_edited_structures_come_back_as_json(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text(json.dumps({HISTORY_KEY: [{"id": "abc"}]}), encoding="utf-8")
        assert json.loads(JsonFileStore(path).get(HISTORY_KEY)) == [{"id": "abc"}]

    def test_delete(self, tmp_path):
        store = JsonFileStore(tmp_path / "vault.json")
        store.set(HISTORY_KEY, "[]")
        store.delete(HISTORY_KEY)
        store.delete(USER_PROFILE_KEY)
        assert store.get(HISTORY_KEY) is None

    def test_corrupt_file_raises_on_read(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFileStore(path).get(HISTORY_KEY)

    def test_non_object_file_raises_on_read(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonFileStore(path).get(HISTORY_KEY)

    def test_set_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text("not json", encoding="utf-8")
        store = JsonFileStore(path)
        store.set(HISTORY_KEY, "[]")
        assert store.get(HISTORY_KEY) == "[]"

    def test_delete_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text("not json", encoding="utf-8")
        JsonFileStore(path).delete(HISTORY_KEY)
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_delete_without_file_creates_nothing(self, tmp_path):
        path = tmp_path / "vault.json"
        JsonFileStore(path).delete(HISTORY_KEY)
        assert not path.exists()

    def test_clear_empties_a_corrupt_vault(self, tmp_path):
        path = tmp_path / "vault.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(path)
        store.clear()
        assert all(store.get(key) is None for key in ALL_KEYS)


class TestLoadVideo:

    def test_reads_bytes_and_mime(self, tmp_path):
        clip = tmp_path / "swing.mp4"
        clip.write_bytes(b"\x00\x01video")
        assert load_video(clip) == (b"\x00\x01video", "video/mp4")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_video(tmp_path / "nope.mp4")

    def test_rejects_non_video(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hi", encoding="utf-8")
        with pytest.raises(VideoValidationError):
            load_video(notes)

    def test_rejects_large_file(self, tmp_path):
        clip = tmp_path / "swing.mp4"
        clip.write_bytes(b"\x00" * (1024 * 1024 + 1))
        with pytest.raises(VideoValidationError, match="under 1MB"):
            load_video(clip, max_mb=1)

    @pytest.mark.parametrize("name, mime", [
        ("a.mov", "video/quicktime"),
        ("a.MOV", "video/quicktime"),
        ("a.webm", "video/webm"),
        ("a.unknownext", "application/octet-stream"),
    ])
    def test_guess_mime(self, name, mime):
        assert guess_video_mime_type(Path(name)) == mime


class TestSettings:

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for key in ("JUSTSWING_STORE", "JUSTSWING_MODEL", "JUSTSWING_VAULT_PATH",
                    "FIREBASE_PROJECT_ID", "JUSTSWING_FIRESTORE_COLLECTION",
                    "JUSTSWING_MAX_VIDEO_MB"):
            monkeypatch.delenv(key, raising=False)

    def test_defaults(self):
        settings = load_settings()
        assert settings.model == DEFAULT_MODEL
        assert settings.store_backend == "file"
        assert settings.vault_path.name == "vault.json"
        assert settings.max_video_mb == 30
        assert settings.firebase_project_id is None

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("JUSTSWING_STORE", "Firestore")
        monkeypatch.setenv("JUSTSWING_MODEL", "gemini-2.5-pro")
        monkeypatch.setenv("JUSTSWING_VAULT_PATH", str(tmp_path / "v.json"))
        monkeypatch.setenv("FIREBASE_PROJECT_ID", "demo-project")
        monkeypatch.setenv("JUSTSWING_MAX_VIDEO_MB", "12")

        settings = load_settings()
        assert settings.store_backend == "firestore"
        assert settings.model == "gemini-2.5-pro"
        assert settings.vault_path == tmp_path / "v.json"
        assert settings.firebase_project_id == "demo-project"
        assert settings.max_video_mb == 12

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("JUSTSWING_STORE", "s3")
        with pytest.raises(RuntimeError):
            load_settings()

    def test_required_env(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(RuntimeError, match="GOOGLE_API_KEY"):
            get_required_env("GOOGLE_API_KEY")
        monkeypatch.setenv("GOOGLE_API_KEY", "secret")
        assert get_required_env("GOOGLE_API_KEY") == "secret"
