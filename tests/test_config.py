from pathlib import Path

from tmap.config import DEFAULT_EDGE_TYPES_PATH, Config


def test_config_defaults(monkeypatch):
    for name in ["EDGE_TYPES_PATH", "PLUGIN_ROOT", "JSON_SPACES", "RECORD_DB_DIR", "RECORD_DB_PATH", "TMAP_AUTHOR"]:
        monkeypatch.delenv(name, raising=False)
    cfg = Config()
    namespace = cfg.namespace()
    assert namespace.edge_types_path == DEFAULT_EDGE_TYPES_PATH
    assert namespace.json_spaces == 4
    assert cfg.AUTHOR is None
    assert cfg.RECORD_DB_PATH == Path("records_db") / "records.db"


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("EDGE_TYPES_PATH", "$:/types/")
    monkeypatch.setenv("PLUGIN_ROOT", "$:/plugins/demo")
    monkeypatch.setenv("JSON_SPACES", "2")
    monkeypatch.setenv("RECORD_DB_DIR", str(tmp_path))
    monkeypatch.delenv("RECORD_DB_PATH", raising=False)
    monkeypatch.setenv("TMAP_AUTHOR", "alice")
    monkeypatch.setenv("SEED_BUILTIN_TYPES", "0")
    cfg = Config()
    namespace = cfg.namespace()
    assert namespace.edge_types_path == "$:/types"
    assert namespace.path_for("tmap:x") == "$:/types/tmap:x"
    assert namespace.plugin_root == "$:/plugins/demo"
    assert namespace.json_spaces == 2
    assert cfg.RECORD_DB_PATH == tmp_path / "records.db"
    assert cfg.AUTHOR == "alice"
    assert cfg.SEED_BUILTIN_TYPES is False


def test_invalid_json_spaces_falls_back(monkeypatch):
    monkeypatch.setenv("JSON_SPACES", "wide")
    assert Config().JSON_SPACES == 4


def test_explicit_db_path_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("RECORD_DB_DIR", str(tmp_path / "dir"))
    monkeypatch.setenv("RECORD_DB_PATH", str(tmp_path / "explicit.db"))
    assert Config().RECORD_DB_PATH == tmp_path / "explicit.db"


def test_explicit_values_win_over_env(monkeypatch, tmp_path):
    monkeypatch.setenv("RECORD_DB_DIR", str(tmp_path / "env-dir"))
    monkeypatch.setenv("RECORD_DB_PATH", str(tmp_path / "env.db"))
    monkeypatch.setenv("SEED_BUILTIN_TYPES", "1")
    cfg = Config(RECORD_DB_PATH=tmp_path / "given.db", SEED_BUILTIN_TYPES=False)
    assert cfg.RECORD_DB_PATH == tmp_path / "given.db"
    assert cfg.SEED_BUILTIN_TYPES is False

    cfg = Config(RECORD_DB_DIR=str(tmp_path / "given-dir"))
    assert cfg.RECORD_DB_DIR == tmp_path / "given-dir"
    assert cfg.RECORD_DB_PATH == tmp_path / "env.db"
