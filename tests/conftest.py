import os
import shutil
from pathlib import Path
import tempfile
import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_home_config():
    """Temporarily move any existing user-level analyzer config out of the way.

    Tests expect the built-in defaults. This fixture moves the file aside
    and clears the override variable for the duration of the test
    session, then restores both afterwards.
    """
    config_path = Path.home() / ".commit_analyzer" / "config.json"
    saved_env = os.environ.pop("COMMIT_ANALYZER_CONFIG", None)
    backup_dir = None
    moved = False
    if config_path.exists():
        backup_dir = Path(tempfile.mkdtemp(prefix="commit_analyzer_backup_"))
        shutil.move(str(config_path), str(backup_dir / "config.json"))
        moved = True

    try:
        yield
    finally:
        if saved_env is not None:
            os.environ["COMMIT_ANALYZER_CONFIG"] = saved_env
        if moved and backup_dir is not None:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(backup_dir / "config.json"), str(config_path))
            shutil.rmtree(str(backup_dir), ignore_errors=True)
