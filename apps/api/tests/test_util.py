from __future__ import annotations

import threading
from pathlib import Path

import pytest

from notizapp_api.util import atomic_write_text


def test_concurrent_writes_to_one_file(tmp_path) -> None:
    target = tmp_path / "note.md"
    errors: list[BaseException] = []
    bodies = [f"version {i}\n" * 50 for i in range(16)]

    def write(body: str) -> None:
        try:
            atomic_write_text(target, body)
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=write, args=(b,)) for b in bodies]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert target.read_text(encoding="utf-8") in bodies
    assert sorted(p.name for p in tmp_path.iterdir()) == ["note.md"]


def test_failed_replace_leaves_no_temp_file(tmp_path, monkeypatch) -> None:
    def refuse(self, target):
        raise PermissionError(13, "Permission denied", str(target))

    monkeypatch.setattr(Path, "replace", refuse)
    with pytest.raises(PermissionError):
        atomic_write_text(tmp_path / "note.md", "x")

    assert list(tmp_path.iterdir()) == []
