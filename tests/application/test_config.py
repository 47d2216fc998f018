from pathlib import Path

from readlog.application.config import AppConfig, resolve_config
from readlog.application.factory import build_tracker, get_record_gateway
from readlog.infrastructure.adapters.memory_gateway import InMemoryRecordGateway
from readlog.infrastructure.adapters.sqlite_gateway import SqliteRecordGateway


def test_defaults():
    config = resolve_config()
    assert config.backend == "sqlite"
    assert config.db_path == Path.home() / ".local/share/readlog/reading.db"
    assert config.verbose == 1


def test_none_overrides_are_ignored(monkeypatch):
    monkeypatch.setenv("READLOG_BACKEND", "memory")
    config = resolve_config({"backend": None})
    assert config.backend == "memory"


def test_cli_overrides_beat_env(monkeypatch, tmp_path):
    monkeypatch.setenv("READLOG_DB_PATH", str(tmp_path / "env.db"))
    config = resolve_config({"db_path": tmp_path / "cli.db"})
    assert config.db_path == (tmp_path / "cli.db").resolve()


def test_toml_file_is_lowest_priority(monkeypatch, tmp_path):
    toml = tmp_path / "config.toml"
    toml.write_text('backend = "memory"\nverbose = 3\n')
    monkeypatch.setattr("readlog.application.config.CONFIG_FILE", toml)
    monkeypatch.setenv("READLOG_VERBOSE", "2")

    config = resolve_config()

    assert config.backend == "memory"
    assert config.verbose == 2


def test_db_path_expands_user():
    config = AppConfig(db_path="~/books.db")
    assert config.db_path == (Path.home() / "books.db").resolve()


def test_factory_selects_backend(tmp_path):
    assert isinstance(get_record_gateway(AppConfig(backend="memory")), InMemoryRecordGateway)

    gw = get_record_gateway(AppConfig(backend="sqlite", db_path=tmp_path / "r.db"))
    assert isinstance(gw, SqliteRecordGateway)
    gw.close()


def test_build_tracker_owns_gateway(tmp_path):
    tracker = build_tracker(AppConfig(db_path=tmp_path / "r.db"))
    tracker.start()
    tracker.close()

    assert (tmp_path / "r.db").exists()
