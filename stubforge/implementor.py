from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from stubforge import config
from stubforge.adapters.java_adapter import JavaAdapter
from stubforge.cir.model import ConstructorDescriptor, MethodDescriptor, TypeDescriptor, TypeLevel
from stubforge.emitter import impl_name, render_source, write_source
from stubforge.errors import CompileFailure
from stubforge.introspector import TypeIntrospector
from stubforge.resolver import Resolution, check_target, resolve
from stubforge.toolchain import Archiver, Compiler, JarArchiver, JavacCompiler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    target: TypeDescriptor
    impl_name: str
    source_path: Optional[Path]
    constructors: Tuple[ConstructorDescriptor, ...]
    members: Tuple[MethodDescriptor, ...]
    archive_path: Optional[Path] = None


class Implementor:
    """
    Sequences introspection -> resolution -> emission, and for jar mode
    compilation and packaging on top. Every call starts from a fresh
    JavaAdapter, so nothing leaks between generations.
    """

    def __init__(
        self,
        source_path: Optional[Sequence[Path | str]] = None,
        files: Optional[Mapping[str, str]] = None,
        compiler: Optional[Compiler] = None,
        archiver: Optional[Archiver] = None,
    ) -> None:
        self.source_path: List[Path] = [Path(p) for p in (config.SOURCE_PATH if source_path is None else source_path)]
        self.files = dict(files or {})
        self.compiler = compiler
        self.archiver = archiver

    # ---------------- Resolution ----------------

    def _adapter(self, extra_roots: Sequence[Path] = ()) -> JavaAdapter:
        return JavaAdapter(source_path=[*self.source_path, *extra_roots], files=self.files)

    def resolve(self, type_name: str, extra_roots: Sequence[Path] = ()) -> Resolution:
        adapter = self._adapter(extra_roots)
        td = adapter.load(type_name)
        check_target(td)
        levels = TypeIntrospector(adapter).levels(td)
        return resolve(td, levels, adapter.is_assignable_from)

    def render(self, type_name: str) -> Tuple[Resolution, str]:
        resolution = self.resolve(type_name)
        return resolution, render_source(
            resolution.target, resolution.constructors, resolution.members.values()
        )

    def hierarchy(self, type_name: str) -> Tuple[List[TypeLevel], Dict[str, Any]]:
        adapter = self._adapter()
        td = adapter.load(type_name)
        levels = TypeIntrospector(adapter).levels(td)
        return levels, adapter.graph.to_debug_json()

    # ---------------- Generation ----------------

    def implement(self, type_name: str, root: Path | str = ".", extra_roots: Sequence[Path] = ()) -> GenerationResult:
        """
        Write <root>/<package dirs>/<Simple>Impl.java for type_name.
        """
        resolution = self.resolve(type_name, extra_roots)
        td = resolution.target
        members = tuple(resolution.members.values())
        path = write_source(td, Path(root), resolution.constructors, members)
        return GenerationResult(
            target=td,
            impl_name=impl_name(td),
            source_path=path,
            constructors=resolution.constructors,
            members=members,
        )

    def implement_jar(self, type_name: str, out_dir: Path | str) -> GenerationResult:
        """
        Generate under out_dir, compile, and pack the target's top-level
        package directory into out_dir/<Simple>Impl.jar.
        """
        out_dir = Path(out_dir)
        extra = [out_dir] if out_dir.exists() else []
        result = self.implement(type_name, out_dir, extra_roots=extra)

        compiler = self.compiler or JavacCompiler(classpath=[*self.source_path, out_dir])
        status = compiler.compile([result.source_path])
        if status != 0:
            raise CompileFailure(f"Couldn't compile {result.source_path} (exit status {status})")

        archive_path = out_dir / (result.impl_name + config.ARCHIVE_SUFFIX)
        td = result.target
        if td.package:
            root_dir = out_dir / td.package.split(".")[0]
            archiver = self.archiver or JarArchiver()
        else:
            root_dir = out_dir
            archiver = self.archiver or JarArchiver(base_dir=out_dir, include=_compiled_units_of(result.impl_name))
        archiver.package_archive(root_dir, archive_path)
        return replace(result, archive_path=archive_path)


def _compiled_units_of(name: str):
    def include(path: Path) -> bool:
        return path.suffix == ".class" and (path.stem == name or path.stem.startswith(name + "$"))
    return include
