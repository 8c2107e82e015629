import threading

import pytest
from bson import ObjectId

from user_records_api.app.schemas.user import UserRead
from user_records_api.app.store import (
    DuplicateKeyError,
    InMemoryUserStore,
    NoDocumentsError,
    StoreError,
)


def _doc(**fields):
    return {"_id": ObjectId(), "name": "", "email": "", "password": "", **fields}


def test_insert_and_find_one(store):
    doc = _doc(name="Ann")

    assert store.insert_one(doc) == doc["_id"]
    user = store.find_one({"_id": doc["_id"]}).decode(UserRead)

    assert user.id == str(doc["_id"])
    assert user.name == "Ann"


def test_insert_duplicate_id_fails(store):
    doc = _doc()
    store.insert_one(doc)

    with pytest.raises(DuplicateKeyError):
        store.insert_one(dict(doc))
    assert len(store) == 1


def test_insert_requires_id(store):
    with pytest.raises(StoreError):
        store.insert_one({"name": "Ann"})


def test_find_one_without_match_raises_no_documents(store):
    with pytest.raises(NoDocumentsError):
        store.find_one({"_id": ObjectId()}).decode(UserRead)


def test_documents_are_copied(store):
    doc = _doc(name="Ann")
    store.insert_one(doc)
    doc["name"] = "mutated"

    with store.find_many({}) as cursor:
        found = next(cursor)
    found["name"] = "mutated again"

    assert store.find_one({"_id": doc["_id"]}).decode(UserRead).name == "Ann"


def test_find_many_filters_by_equality(store):
    store.insert_one(_doc(name="Ann"))
    store.insert_one(_doc(name="Bob"))
    store.insert_one(_doc(name="Ann"))

    with store.find_many({"name": "Ann"}) as cursor:
        names = [doc["name"] for doc in cursor]
    with store.find_many({}) as cursor:
        everything = list(cursor)

    assert names == ["Ann", "Ann"]
    assert len(everything) == 3


def test_closed_cursor_stops_iteration(store):
    store.insert_one(_doc())
    store.insert_one(_doc())

    cursor = store.find_many({})
    next(cursor)
    cursor.close()

    assert list(cursor) == []


def test_cursor_closed_when_block_raises(store):
    store.insert_one(_doc())
    cursor = store.find_many({})

    with pytest.raises(RuntimeError):
        with cursor:
            raise RuntimeError("consumer failed")

    assert cursor.closed


def test_update_one_sets_fields(store):
    doc = _doc(name="Ann", email="ann@example.com")
    store.insert_one(doc)

    matched = store.update_one({"_id": doc["_id"]}, {"$set": {"name": "Anne", "password": "s3cret"}})
    user = store.find_one({"_id": doc["_id"]}).decode(UserRead)

    assert matched == 1
    assert (user.name, user.email, user.password) == ("Anne", "ann@example.com", "s3cret")


def test_update_one_without_match(store):
    assert store.update_one({"_id": ObjectId()}, {"$set": {"name": "x"}}) == 0
    assert len(store) == 0


@pytest.mark.parametrize("update", [{"$inc": {"age": 1}}, {"$set": {"_id": ObjectId()}}])
def test_update_one_rejects_unsupported_updates(store, update):
    doc = _doc()
    store.insert_one(doc)

    with pytest.raises(StoreError):
        store.update_one({"_id": doc["_id"]}, update)


def test_delete_one(store):
    doc = _doc()
    store.insert_one(doc)

    assert store.delete_one({"_id": doc["_id"]}) == 1
    assert store.delete_one({"_id": doc["_id"]}) == 0
    assert len(store) == 0


def test_concurrent_inserts():
    store = InMemoryUserStore()

    def insert_many():
        for _ in range(200):
            store.insert_one(_doc())

    threads = [threading.Thread(target=insert_many) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 1600
