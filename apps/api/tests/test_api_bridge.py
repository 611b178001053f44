from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("VAULT_DIR", str(tmp_path))
    monkeypatch.delenv("API_AUTH_MODE", raising=False)
    monkeypatch.delenv("WATCH_ON_STARTUP", raising=False)
    from main import create_app

    with TestClient(create_app()) as c:
        yield c


def test_note_lifecycle(client, tmp_path) -> None:
    r = client.put("/notes/Work/plan", json={"content": "# Plan\n"})
    assert r.status_code == 200
    assert r.json()["filename"] == "Work/plan.md"
    assert (tmp_path / "Work" / "plan.md").read_text(encoding="utf-8") == "# Plan\n"

    notes = client.get("/notes").json()
    assert len(notes) == 1
    assert notes[0]["filename"] == "plan.md"
    assert notes[0]["folder"] == "Work"
    assert notes[0]["content"] == "# Plan\n"
    assert notes[0]["updatedAt"]

    r = client.post("/notes/rename", json={"oldFilename": "Work/plan.md", "newFilename": "Work/done.md"})
    assert r.status_code == 200
    assert [n["filename"] for n in client.get("/notes").json()] == ["done.md"]

    assert client.delete("/notes/Work/done.md").status_code == 200
    assert client.get("/notes").json() == []


def test_missing_note_maps_to_404(client) -> None:
    r = client.delete("/notes/ghost.md")
    assert r.status_code == 404
    assert r.headers.get("x-request-id")


def test_path_traversal_rejected(client) -> None:
    r = client.post("/notes/rename", json={"oldFilename": "a.md", "newFilename": "../escape.md"})
    assert r.status_code == 400
    assert r.json()["detail"] == "path_traversal_not_allowed"


def test_folder_endpoints(client, tmp_path) -> None:
    assert client.post("/folders", json={"path": "X"}).status_code == 200
    assert client.post("/folders", json={"path": ".hidden"}).status_code == 200
    assert client.get("/folders").json() == ["X"]

    client.put("/notes/a.md", json={"content": "root"})
    client.put("/notes/X/a.md", json={"content": "moved"})

    assert client.post("/folders/rename", json={"oldName": "X", "newName": "Y"}).status_code == 200
    assert client.get("/folders").json() == ["Y"]

    r = client.delete("/folders/Y", params={"mode": "move"})
    assert r.status_code == 200
    names = sorted(n["filename"] for n in client.get("/notes").json())
    assert names == ["a.md", "a_1.md"]
    assert not (tmp_path / "Y").exists()


def test_recursive_folder_delete(client, tmp_path) -> None:
    client.put("/notes/Trash/a.md", json={"content": "x"})
    r = client.delete("/folders/Trash", params={"mode": "recursive"})
    assert r.status_code == 200
    assert client.get("/notes").json() == []
    assert client.delete("/folders/Trash", params={"mode": "recursive"}).status_code == 404


def test_metadata_round_trip_and_migration(client, tmp_path) -> None:
    (tmp_path / ".notizapp-metadata.json").write_text(json.dumps({"folders": {"A": 1}}), encoding="utf-8")
    assert client.get("/metadata").json() == {
        "folders": {"A": 1},
        "pinnedNotes": [],
        "folderOrder": None,
        "settings": None,
    }

    payload = {"folders": {"A": 1, "B": 2}, "pinnedNotes": ["a.md"], "folderOrder": ["B", "A"], "settings": {"theme": "dark"}}
    assert client.put("/metadata", json=payload).status_code == 200
    assert client.get("/metadata").json() == payload


def test_watch_endpoints(client, tmp_path) -> None:
    assert client.get("/watch").json() == {"watching": False, "path": None, "changes": 0}

    r = client.post("/watch", json={})
    assert r.status_code == 200
    assert r.json()["watching"] is True
    assert r.json()["path"] == str(tmp_path.resolve())

    (tmp_path / "sub").mkdir()
    r = client.post("/watch", json={"path": "sub"})
    assert r.json()["path"] == str((tmp_path / "sub").resolve())
    assert client.get("/watch").json()["path"] == str((tmp_path / "sub").resolve())

    assert client.post("/watch", json={"path": "missing"}).status_code == 404
    assert client.get("/watch").json()["watching"] is False


def test_version(client) -> None:
    assert client.get("/version").json()["version"]


def test_dotted_note_names_stay_distinct(client, tmp_path) -> None:
    r1 = client.put("/notes/Plan v1.2", json={"content": "first"})
    r2 = client.put("/notes/Plan v1.3", json={"content": "second"})
    assert r1.json()["filename"] == "Plan v1.2.md"
    assert r2.json()["filename"] == "Plan v1.3.md"
    assert (tmp_path / "Plan v1.2.md").read_text(encoding="utf-8") == "first"
    assert (tmp_path / "Plan v1.3.md").read_text(encoding="utf-8") == "second"


def test_delete_dotted_name_does_not_hit_sibling(client, tmp_path) -> None:
    (tmp_path / "Meeting 2024.md").write_text("keep", encoding="utf-8")

    assert client.delete("/notes/Meeting 2024.01").status_code == 404
    assert (tmp_path / "Meeting 2024.md").exists()

    client.put("/notes/Meeting 2024.01", json={"content": "jan"})
    assert client.delete("/notes/Meeting 2024.01").status_code == 200
    assert not (tmp_path / "Meeting 2024.01.md").exists()
    assert (tmp_path / "Meeting 2024.md").read_text(encoding="utf-8") == "keep"
