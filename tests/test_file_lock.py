import json
import threading

import pytest

from sitecms.errors import StorageCorruption
from sitecms.utils.file_lock import atomic_write_json, locked_document, read_json


def test_atomic_write_replaces_whole_file(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"a": [1, 2, 3], "b": "long value " * 100})
    atomic_write_json(path, {"a": []})
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": []}


def test_atomic_write_leaves_no_temp_files(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"ok": True})
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


def test_failed_write_keeps_previous_document(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"version": 1})
    with pytest.raises(TypeError):
        atomic_write_json(path, {"version": object()})
    assert read_json(path) == {"version": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]


def test_writes_unicode_verbatim(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"duration": "90–120 minutes"})
    assert "90–120" in path.read_text(encoding="utf-8")


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_json(tmp_path / "missing.json")


@pytest.mark.parametrize("raw", [b"", b"   \n", b"{", b"nope"])
def test_read_corrupt_file(tmp_path, raw):
    path = tmp_path / "doc.json"
    path.write_bytes(raw)
    with pytest.raises(StorageCorruption):
        read_json(path)


def test_locked_document_serializes_read_modify_write(tmp_path):
    path = tmp_path / "counter.json"
    atomic_write_json(path, {"count": 0})

    def bump():
        for _ in range(25):
            with locked_document(path):
                data = read_json(path)
                data["count"] += 1
                atomic_write_json(path, data)

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert read_json(path) == {"count": 100}


def test_lock_released_after_error(tmp_path):
    path = tmp_path / "doc.json"
    with pytest.raises(RuntimeError):
        with locked_document(path):
            raise RuntimeError("boom")
    with locked_document(path):
        pass
