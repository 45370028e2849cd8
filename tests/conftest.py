"""
Configuration file for pytest test suite.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from uploadhandler.handler import UploadHandler


@pytest.fixture(autouse=True)
def reset_upload_handler() -> Generator[None, None, None]:
    """Make sure no test sees another test's process-wide handler."""
    UploadHandler.clear_instance()
    yield
    UploadHandler.clear_instance()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Destination directory for local uploads."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A local file to upload."""
    path = tmp_path / "report.final.txt"
    path.write_text("Hello, World!")
    return path
