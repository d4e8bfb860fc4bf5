"""
Tests for the local key-value store and login flag
"""

import json

from brewboard.services.auth import (
    DEFAULT_REDIRECT,
    is_authenticated,
    login,
    logout,
    redirect_target,
)
from brewboard.services.storage import LocalStore


class TestLocalStore:

    def test_set_get_remove(self, store):
        assert store.get_item("missing") is None
        store.set_item("a", "1")
        assert store.get_item("a") == "1"
        assert store.keys() == ["a"]
        store.remove_item("a")
        assert store.get_item("a") is None

    def test_json_round_trip(self, store):
        store.save_json("catalog", [{"id": "x"}])
        assert store.load_json("catalog") == [{"id": "x"}]
        assert json.loads(store.get_item("catalog")) == [{"id": "x"}]

    def test_values_survive_new_instance(self, store):
        store.set_item("auth", "1")
        assert LocalStore(store.path).get_item("auth") == "1"

    def test_default_for_absent_key(self, store):
        assert store.load_json("nope", default=[]) == []

    def test_corrupt_value_uses_default(self, store):
        store.set_item("catalog", "{not json")
        assert store.load_json("catalog", default=[]) == []

    def test_unreadable_file_uses_default(self, tmp_path):
        path = tmp_path / "local_storage.json"
        path.write_text("garbage", encoding="utf-8")
        store = LocalStore(path)
        assert store.load_json("catalog", default=[]) == []
        assert store.keys() == []

    def test_non_object_file_ignored(self, tmp_path):
        path = tmp_path / "local_storage.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert LocalStore(path).keys() == []

    def test_clear(self, store):
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.clear()
        assert store.keys() == []

    def test_creates_parent_directory(self, tmp_path):
        store = LocalStore(tmp_path / "nested" / "dir" / "store.json")
        assert store.set_item("a", "1")
        assert store.path.exists()


class TestAuth:

    def test_login_sets_flag(self, store):
        assert not is_authenticated(store)
        result = login(store, "owner@brew.cafe", "secret")
        assert result.is_valid
        assert is_authenticated(store)
        assert store.get_item("auth") == "1"

    def test_login_rejects_bad_form(self, store):
        result = login(store, "owner", "")
        assert not result.is_valid
        assert set(result.field_errors) == {"email", "password"}
        assert not is_authenticated(store)

    def test_logout(self, store):
        login(store, "owner@brew.cafe", "secret")
        logout(store)
        assert not is_authenticated(store)

    def test_redirect_target(self):
        views = ["Overview", "Stock", "Finance"]
        assert redirect_target("Finance", views) == "Finance"
        assert redirect_target("Admin", views) == DEFAULT_REDIRECT
        assert redirect_target(None, views) == "Overview"
