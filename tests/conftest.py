"""Root pytest configuration for merkledag tests."""
import pytest

from merkledag.settings import Settings
from merkledag.sources import MemoryDir, MemoryFile
from merkledag.storage.memory import MemoryStore


# Keep the developer's environment out of settings-driven tests
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Clear merkledag environment variables for every test."""
    for key in (
        "MERKLEDAG_STORE_DIR",
        "MERKLEDAG_COMPRESS",
        "MERKLEDAG_ZSTD_LEVEL",
        "MERKLEDAG_CHUNK_SIZE",
        "MERKLEDAG_HASH",
        "MERKLEDAG_FOLLOW_SYMLINKS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def store():
    """Standard in-memory store for testing."""
    return MemoryStore()


@pytest.fixture
def settings(tmp_path):
    """Standard test settings with a store under tmp_path."""
    return Settings(store_dir=str(tmp_path / "store"))


@pytest.fixture
def sample_tree():
    """
    Small tree with a nested directory and a duplicated file.

        root/
          readme.md        "hello"
          src/
            main.py        "print('hi')"
            copy.md        "hello"
          empty/
    """
    return MemoryDir("root", [
        MemoryFile("readme.md", b"hello"),
        MemoryDir("src", [
            MemoryFile("main.py", b"print('hi')"),
            MemoryFile("copy.md", b"hello"),
        ]),
        MemoryDir("empty", []),
    ])


@pytest.fixture
def local_tree(tmp_path):
    """On-disk copy of sample_tree under tmp_path/root."""
    root = tmp_path / "root"
    (root / "src").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "readme.md").write_bytes(b"hello")
    (root / "src" / "main.py").write_bytes(b"print('hi')")
    (root / "src" / "copy.md").write_bytes(b"hello")
    return root
