from fastapi.testclient import TestClient

from tmap.app import create_app
from tmap.config import Config


def build_client(tmp_path, monkeypatch):
    monkeypatch.setenv("RECORD_DB_DIR", str(tmp_path))
    monkeypatch.delenv("RECORD_DB_PATH", raising=False)
    monkeypatch.delenv("EDGE_TYPES_PATH", raising=False)
    monkeypatch.setenv("SEED_BUILTIN_TYPES", "1")
    cfg = Config()
    return TestClient(create_app(cfg)), cfg


def test_edge_type_routes(tmp_path, monkeypatch):
    client, cfg = build_client(tmp_path, monkeypatch)
    with client:
        assert client.get("/edge-types").json() == []
        assert client.get("/edge-types/tmap:cites").status_code == 404

        resp = client.put(
            "/edge-types/tmap:cites",
            json={"description": "Cites", "show-label": "true", "style": {"color": {"color": "red"}}},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == "tmap:cites"
        assert data["label"] == "cites"
        assert data["path"] == cfg.namespace().path_for("tmap:cites")
        assert data["show-label"] == "true"
        assert data["style"] == {"color": {"color": "red"}}
        assert data["exists"] is True
        assert data["created"] and data["modified"]

        resp = client.put("/edge-types/tmap:cites", json={"style": {"width": 2}, "merge_style": True})
        assert resp.json()["style"] == {"color": {"color": "red"}, "width": 2}
        assert resp.json()["description"] == "Cites"

        listed = client.get("/edge-types").json()
        assert [item["id"] for item in listed] == ["tmap:cites"]

        resp = client.post("/edge-types/tmap:cites/export", json={"destination": "$:/temp/dump"})
        assert resp.status_code == 200
        assert client.app.state.store.get_record("$:/temp/dump").fields["id"] == "tmap:cites"

        resp = client.post(
            "/edge-types/tmap:cites/export",
            json={"destination": cfg.namespace().path_for("tmap:copy")},
        )
        assert resp.status_code == 400

        assert client.delete("/edge-types/tmap:cites").status_code == 204
        assert client.get("/edge-types/tmap:cites").status_code == 404


def test_builtin_type_uses_seeded_defaults(tmp_path, monkeypatch):
    client, _ = build_client(tmp_path, monkeypatch)
    with client:
        resp = client.put("/edge-types/tmap:link", json={"label": "Links to"})
        data = resp.json()
        assert data["builtin"] is True
        assert data["label"] == "Links to"
        assert data["description"] == "Automatically generated link between two nodes"
        assert client.delete("/edge-types/tmap:link").status_code == 400


def test_export_with_empty_destination_is_rejected(tmp_path, monkeypatch):
    client, _ = build_client(tmp_path, monkeypatch)
    with client:
        resp = client.post("/edge-types/tmap:ghost/export", json={"destination": ""})
        assert resp.status_code == 400
        assert client.get("/edge-types").json() == []


def test_non_string_stored_values_are_served(tmp_path, monkeypatch):
    client, cfg = build_client(tmp_path, monkeypatch)
    with client:
        client.app.state.store.put_record(
            {
                "title": cfg.namespace().path_for("tmap:x"),
                "show-label": True,
                "description": 7,
                "label": 3,
                "created": 20240101090000000,
            }
        )
        resp = client.get("/edge-types/tmap:x")
        assert resp.status_code == 200
        data = resp.json()
        assert data["show-label"] is True
        assert data["description"] == "7"
        assert data["label"] == "3"
        assert data["created"] == "20240101090000000"
        assert client.get("/edge-types").status_code == 200
