"""
External collaborators of the build: a compiler and an archiver.
Both sit behind narrow protocols so resolution and emission never depend
on a particular toolchain; tests swap in fakes.
"""
from __future__ import annotations

import logging
import os
import subprocess
import zipfile
from pathlib import Path
from typing import Callable, Iterator, Optional, Protocol, Sequence

from stubforge import config
from stubforge.errors import CompileFailure, PackagingFailure

logger = logging.getLogger(__name__)


class Compiler(Protocol):
    def compile(self, source_paths: Sequence[Path]) -> int:
        ...


class Archiver(Protocol):
    def package_archive(self, root_dir: Path, out_path: Path) -> Path:
        ...


# -----------------------------------------------------------------------------
# javac
# -----------------------------------------------------------------------------
class JavacCompiler:
    """
    Runs javac on the given files. Class files land next to their sources;
    types pulled in from the classpath are read but not written back.
    """

    def __init__(
        self,
        classpath: Sequence[Path | str] = (),
        javac: str = config.JAVAC,
        timeout: Optional[int] = config.JAVAC_TIMEOUT_SECONDS,
    ) -> None:
        self.classpath = [str(p) for p in classpath]
        self.javac = javac
        self.timeout = timeout

    def command(self, source_paths: Sequence[Path]) -> list[str]:
        cmd = [self.javac, "-encoding", config.SOURCE_ENCODING, "-implicit:none"]
        if self.classpath:
            cmd += ["-cp", os.pathsep.join(self.classpath)]
        cmd += [str(p) for p in source_paths]
        return cmd

    def compile(self, source_paths: Sequence[Path]) -> int:
        cmd = self.command(source_paths)
        logger.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            raise CompileFailure(f"Compiler executable '{self.javac}' not found")
        except subprocess.TimeoutExpired:
            raise CompileFailure(f"Compiler did not finish within {self.timeout}s")

        if result.returncode != 0:
            logger.error("javac exited with %s:\n%s", result.returncode, (result.stderr or result.stdout).strip())
        return result.returncode


# -----------------------------------------------------------------------------
# jar
# -----------------------------------------------------------------------------
def manifest_text(version: str = config.MANIFEST_VERSION) -> str:
    return f"Manifest-Version: {version}\r\n\r\n"


class JarArchiver:
    """
    Packs a directory tree into a jar: a manifest carrying only its
    version, then one entry per directory (empty, trailing slash) and per
    file (raw bytes), named relative to `base_dir` (default: the parent of
    root_dir). The archive only appears at out_path once fully written.
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        include: Optional[Callable[[Path], bool]] = None,
    ) -> None:
        self.base_dir = base_dir
        self.include = include

    def _walk(self, path: Path) -> Iterator[Path]:
        yield path
        if path.is_dir():
            for child in sorted(path.iterdir()):
                yield from self._walk(child)

    def _entries(self, root_dir: Path) -> Iterator[Path]:
        if self.include is None:
            yield from self._walk(root_dir)
            return
        for child in sorted(root_dir.iterdir()):
            if child.is_file() and self.include(child):
                yield child

    def package_archive(self, root_dir: Path, out_path: Path) -> Path:
        root_dir, out_path = Path(root_dir), Path(out_path)
        base = self.base_dir if self.base_dir is not None else root_dir.parent
        partial = out_path.with_name(out_path.name + ".part")

        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(partial, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                zf.writestr(config.MANIFEST_PATH, manifest_text())
                for entry in self._entries(root_dir):
                    arcname = entry.relative_to(base).as_posix()
                    if entry.is_dir():
                        zf.writestr(arcname.rstrip("/") + "/", b"")
                    else:
                        zf.writestr(arcname, entry.read_bytes())
            os.replace(partial, out_path)
        except (OSError, ValueError, zipfile.BadZipFile) as e:
            if partial.exists():
                partial.unlink()
            raise PackagingFailure(f"Couldn't write archive {out_path}: {e}")

        logger.info("wrote %s", out_path)
        return out_path
