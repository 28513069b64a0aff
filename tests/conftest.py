import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from savekeep.config import PersistenceConfig  # noqa: E402
from savekeep.store import FileStore  # noqa: E402


@pytest.fixture
def store(tmp_path: Path) -> FileStore:
    return FileStore(root_dir=tmp_path, config=PersistenceConfig())


@pytest.fixture
def obfuscated_store(tmp_path: Path) -> FileStore:
    return FileStore(root_dir=tmp_path, config=PersistenceConfig(encryption_enabled=True, encryption_key="s3cret"))
