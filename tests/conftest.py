import os
import sys
from pathlib import Path

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


class RecordingCompiler:
    """Stands in for javac: drops a fake class file next to each source."""

    def __init__(self, status: int = 0):
        self.status = status
        self.calls = []

    def compile(self, source_paths):
        self.calls.append(list(source_paths))
        if self.status == 0:
            for src in source_paths:
                Path(src).with_suffix(".class").write_bytes(b"\xca\xfe\xba\xbe")
        return self.status


@pytest.fixture
def java_sources(tmp_path):
    """Write {relative path: code} under tmp_path/src and return that root."""
    root = tmp_path / "src"

    def write(files):
        for rel, code in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(code, encoding="utf-8")
        return root

    return write


@pytest.fixture
def fake_compiler():
    return RecordingCompiler()


@pytest.fixture
def failing_compiler():
    return RecordingCompiler(status=1)
