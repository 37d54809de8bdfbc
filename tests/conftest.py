from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        p = tmp_path / "data"
        p.mkdir(parents=True, exist_ok=True)
        return p

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    return tmp_path


@pytest.fixture
def datastore():
    from app import register_entity_types
    from persistence import Datastore, InMemoryCollections

    store = Datastore(InMemoryCollections())
    register_entity_types(store)
    return store


@pytest.fixture
def disk_datastore(sandbox_project: Path):
    from app import register_entity_types
    from persistence import Datastore, DiskJsonCollections

    store = Datastore(DiskJsonCollections(sandbox_project / "data"))
    register_entity_types(store)
    return store
