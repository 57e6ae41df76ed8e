import json
import os

import pytest

from core.errors import StoreIOError, UnknownTypeError, ValidationError
from storage import DEFAULTS, DocumentName, DocumentStore


@pytest.mark.parametrize("name", ["profiles", "settings", "todos"])
def test_read_absent_seeds_and_persists_default(store, name):
    content = store.read(name)
    assert content == DEFAULTS[DocumentName(name)].content
    path = store.path_for(name)
    assert os.path.isfile(path)
    with open(path, "r", encoding="utf-8", newline="") as fh:
        assert fh.read() == content


def test_read_activities_absent_returns_empty_array_without_writing(store):
    assert store.read("activities") == "[]"
    assert not os.path.exists(store.path_for("activities"))
    # Directory is still created before the read
    assert os.path.isdir(store.resolve_data_dir())


def test_todos_default_is_empty_lists():
    assert DEFAULTS[DocumentName.TODOS].content == '{"lists": []}'


def test_packaged_defaults_are_valid_json():
    profiles = json.loads(DEFAULTS[DocumentName.PROFILES].content)
    assert profiles["activeProfileId"] == "work"
    assert any(p["id"] == "work" and p["focusDuration"] == 25 for p in profiles["profiles"])
    settings = json.loads(DEFAULTS[DocumentName.SETTINGS].content)
    assert settings["minimizeToTray"] is True
    assert settings["soundVolume"] == 50


@pytest.mark.parametrize(
    "payload",
    ['{"a":1}', "not json at all", "", "  [1,\r\n 2 ]\n", '{"ünïcode": "✓"}'],
)
def test_write_then_read_is_byte_identical(store, payload):
    store.write("activities", payload)
    assert store.read("activities") == payload
    with open(store.path_for("activities"), "rb") as fh:
        assert fh.read() == payload.encode("utf-8")


def test_existing_file_is_returned_untouched(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "settings.json").write_text('{"custom": true}', encoding="utf-8")
    assert store.read(DocumentName.SETTINGS) == '{"custom": true}'


def test_directory_created_recursively_on_write(tmp_path):
    deep = tmp_path / "a" / "b" / "c"
    s = DocumentStore(deep)
    s.write("todos", '{"lists": [1]}')
    assert (deep / "todos.json").read_text(encoding="utf-8") == '{"lists": [1]}'


def test_resolve_data_dir_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = DocumentStore("relative-data")
    assert os.path.isabs(s.resolve_data_dir())
    assert s.resolve_data_dir() == str(tmp_path / "relative-data")


def test_unknown_name_rejected(store):
    with pytest.raises(UnknownTypeError):
        store.read("goals")
    with pytest.raises(UnknownTypeError):
        store.write("goals", "[]")


def test_reset_all_removes_every_document_and_is_repeatable(store):
    for doc in DocumentName:
        store.write(doc, "[]")
    removed = store.reset_all()
    assert set(removed) == set(DocumentName)
    for doc in DocumentName:
        assert not store.exists(doc)
    assert store.reset_all() == []


def test_reset_all_on_missing_directory_succeeds(tmp_path):
    s = DocumentStore(tmp_path / "never-created")
    assert s.reset_all() == []


def test_reset_all_failure_surfaces_and_keeps_prior_removals(store, monkeypatch):
    for doc in DocumentName:
        store.write(doc, "[]")
    real_remove = os.remove

    def flaky_remove(path):
        if path.endswith("settings.json"):
            raise PermissionError("locked")
        real_remove(path)

    monkeypatch.setattr(os, "remove", flaky_remove)
    with pytest.raises(StoreIOError) as info:
        store.reset_all()
    assert "settings.json" in str(info.value)
    # profiles and activities come before settings and stay deleted
    assert not store.exists("profiles")
    assert not store.exists("activities")
    assert store.exists("settings")


def test_unreadable_directory_raises_store_io_error(tmp_path):
    blocker = tmp_path / "file-not-dir"
    blocker.write_text("x", encoding="utf-8")
    s = DocumentStore(blocker / "data")
    with pytest.raises(StoreIOError) as info:
        s.read("profiles")
    assert isinstance(info.value, OSError)
    assert "failed to create app dir" in str(info.value)


def test_read_json_parses_document(store):
    store.write("todos", '{"lists": [{"id": "x"}]}')
    assert store.read_json("todos") == {"lists": [{"id": "x"}]}


def test_delete_reports_whether_file_existed(store):
    assert store.delete("settings") is False
    store.read("settings")
    assert store.delete("settings") is True
    assert not store.exists("settings")


def test_read_non_utf8_document_raises_store_io_error(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "settings.json").write_bytes(b'{"name": "caf\xe9"}')
    with pytest.raises(StoreIOError) as info:
        store.read("settings")
    assert "failed to read settings" in str(info.value)


def test_write_non_text_keeps_previous_content(store):
    store.write("profiles", '{"keep": true}')
    with pytest.raises(ValidationError):
        store.write("profiles", {"a": 1})
    assert store.read("profiles") == '{"keep": true}'


def test_write_unencodable_text_keeps_previous_content(store, data_dir):
    store.write("todos", '{"lists": ["a"]}')
    with pytest.raises(StoreIOError):
        store.write("todos", '{"lists": ["\ud800"]}')
    assert store.read("todos") == '{"lists": ["a"]}'
    assert sorted(os.listdir(data_dir)) == ["todos.json"]


def test_failed_replace_keeps_previous_content(store, data_dir, monkeypatch):
    store.write("settings", '{"theme": "dark"}')

    def failing_replace(src, dst):
        raise PermissionError(13, "Permission denied", dst)

    monkeypatch.setattr(os, "replace", failing_replace)
    with pytest.raises(StoreIOError):
        store.write("settings", '{"theme": "light"}')
    monkeypatch.undo()
    assert store.read("settings") == '{"theme": "dark"}'
    assert not (data_dir / "settings.json.tmp").exists()
