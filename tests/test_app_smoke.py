from __future__ import annotations

from pathlib import Path

from models.user import User
from persistence import DiskJsonCollections, InMemoryCollections
from settings import Settings, get_settings


def test_get_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PERSIST_TO_DISK", "yes")
    monkeypatch.setenv("SPORTS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DEBUG_LOG_DOCUMENTS", "0")

    settings = get_settings()
    assert settings.persist_to_disk is True
    assert settings.data_dir == tmp_path
    assert settings.debug_log_documents is False


def test_get_settings_defaults(monkeypatch):
    for name in ("PERSIST_TO_DISK", "SPORTS_DATA_DIR", "DEBUG_LOG_DOCUMENTS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()
    assert settings == Settings(persist_to_disk=False, data_dir=None, debug_log_documents=False)


def test_create_datastore_in_memory():
    import app as app_module

    store = app_module.create_datastore(Settings(persist_to_disk=False, data_dir=None, debug_log_documents=True))
    assert isinstance(store._engine, InMemoryCollections)
    assert store.registration_for(User).unique_fields == ("emailAddress",)

    user = User()
    store.save(user)
    assert store.find_by_identifier(User, user.identifier) == user


def test_create_datastore_on_disk_defaults_to_project_data(sandbox_project: Path):
    import app as app_module

    store = app_module.create_datastore(Settings(persist_to_disk=True, data_dir=None, debug_log_documents=False))
    assert isinstance(store._engine, DiskJsonCollections)
    assert store._engine.base_dir == sandbox_project / "data" / "collections"

    store.save(User())
    assert (sandbox_project / "data" / "collections" / "users.json").exists()


def test_create_datastore_loads_env_file(monkeypatch, sandbox_project: Path):
    import app as app_module

    for name in ("PERSIST_TO_DISK", "SPORTS_DATA_DIR", "DEBUG_LOG_DOCUMENTS"):
        # set then delete so teardown also removes what load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    data_dir = sandbox_project / "custom"
    (sandbox_project / "local.env").write_text(
        f"PERSIST_TO_DISK=true\nSPORTS_DATA_DIR={data_dir}\n", encoding="utf-8"
    )
    monkeypatch.chdir(sandbox_project)

    store = app_module.create_datastore()
    assert isinstance(store._engine, DiskJsonCollections)
    assert store._engine.base_dir == data_dir / "collections"
