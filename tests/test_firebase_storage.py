"""Firestore store against an in-process fake client."""

from firebase_admin import firestore

from drills.progress import ProgressStore
from utils.firebase_storage import FirestoreStore
from utils.kv_store import DRILL_PROGRESS_KEY

from conftest import StepClock


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return self._data


class FakeDocument:
    def __init__(self, docs, key):
        self.docs = docs
        self.key = key

    def get(self):
        return FakeSnapshot(self.docs.get(self.key))

    def set(self, data):
        self.docs[self.key] = data

    def delete(self):
        self.docs.pop(self.key, None)


class FakeCollection:
    def __init__(self, docs):
        self.docs = docs

    def document(self, key):
        return FakeDocument(self.docs, key)


class FakeDb:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return FakeCollection(self.collections.setdefault(name, {}))


def test_round_trip():
    db = FakeDb()
    store = FirestoreStore(collection="vault", db=db)
    assert store.get("k") is None

    store.set("k", '{"a": 1}')
    assert store.get("k") == '{"a": 1}'

    doc = db.collections["vault"]["k"]
    assert doc["value"] == '{"a": 1}'
    assert doc["updatedAt"] is firestore.SERVER_TIMESTAMP

    store.delete("k")
    assert store.get("k") is None


def test_document_without_value_reads_as_missing():
    db = FakeDb()
    db.collection("vault").document("k").set({"updatedAt": None})
    assert FirestoreStore(collection="vault", db=db).get("k") is None


def test_progress_persists_through_firestore():
    db = FakeDb()
    ProgressStore(FirestoreStore(db=db), clock=StepClock()).record_completion("tee-height")
    reloaded = ProgressStore(FirestoreStore(db=db))
    assert reloaded.total_sessions() == 1
    assert DRILL_PROGRESS_KEY in db.collections["justswing"]
