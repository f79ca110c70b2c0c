"""Pytest fixtures for explorer core tests."""

import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, List, Optional

import pytest

from explorer_core.persistence import StorageManager
from explorer_core.session import ExplorerSession


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests spanning several components")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def paste_scenario(temp_dir: Path) -> Dict[str, Path]:
    """Create sources and a destination with one colliding name.

    Creates:
        temp_dir/
        ├── src/
        │   ├── a.txt            ("source a")
        │   └── dir/
        │       ├── top.txt      ("top")
        │       └── sub/
        │           └── deep.txt ("deep")
        └── dst/
            └── a.txt            ("existing a")

    Returns:
        Dictionary with 'src', 'dst', 'a' (src/a.txt) and 'dir' (src/dir).
    """
    src = temp_dir / "src"
    dst = temp_dir / "dst"
    (src / "dir" / "sub").mkdir(parents=True)
    dst.mkdir()

    (src / "a.txt").write_text("source a")
    (src / "dir" / "top.txt").write_text("top")
    (src / "dir" / "sub" / "deep.txt").write_text("deep")
    (dst / "a.txt").write_text("existing a")

    return {"src": src, "dst": dst, "a": src / "a.txt", "dir": src / "dir"}


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> float:
        self.now += seconds
        return self.now


class FakeResourceFile:
    """In-memory resource file with controllable mtime and write failures.

    Attributes:
        content: Value "on disk", None if the file has no usable content.
        mtime: Modification time, None if the file does not exist.
        fail_writes: Whether write() fails.
        reads, writes: Number of read()/write() calls.
    """

    def __init__(self, clock: FakeClock, content: Optional[List[str]] = None) -> None:
        self.name = "fake"
        self.clock = clock
        self.content = content
        self.mtime: Optional[float] = clock() if content is not None else None
        self.fail_writes = False
        self.reads = 0
        self.writes = 0

    def external_edit(self, content: List[str]) -> None:
        """Simulate the user editing the file by hand."""
        self.content = content
        self.mtime = self.clock.advance()

    def read(self, prior: List[str]) -> Optional[List[str]]:
        self.reads += 1
        return None if self.content is None else list(self.content)

    def write(self, resource: List[str]) -> bool:
        self.writes += 1
        if self.fail_writes:
            return False
        self.content = list(resource)
        self.mtime = self.clock.advance()
        return True

    def last_modified_time(self) -> Optional[float]:
        return self.mtime


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_resource_file(fake_clock: FakeClock) -> Callable[..., FakeResourceFile]:
    """Factory for FakeResourceFile instances sharing the fake clock."""

    def factory(content: Optional[List[str]] = None) -> FakeResourceFile:
        return FakeResourceFile(fake_clock, content)

    return factory


@pytest.fixture
def storage_manager(temp_dir: Path) -> StorageManager:
    """StorageManager writing below a fresh temporary directory."""
    return StorageManager(temp_dir / "storage")


@pytest.fixture
def session(storage_manager: StorageManager) -> ExplorerSession:
    """ExplorerSession backed by the temporary storage manager."""
    return ExplorerSession(storage_manager)
