import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

import javalang  # type: ignore

from stubforge import config
from stubforge.adapters.jdk import JAVA_LANG, JDK_PACKAGES, JDK_SOURCES
from stubforge.cir.graph import TypeGraph
from stubforge.cir.model import (
    OBJECT,
    PRIMITIVE_TYPES,
    ConstructorDescriptor,
    MethodDescriptor,
    TypeDescriptor,
    primitive_descriptor,
)
from stubforge.errors import ArchiveReadFailure, SourceParseFailure, TypeNotFound

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = {".jar", ".zip"}

_KIND_BY_DECL = {
    "ClassDeclaration": "class",
    "InterfaceDeclaration": "interface",
    "EnumDeclaration": "enum",
    "AnnotationDeclaration": "annotation",
}


@dataclass
class _Scope:
    """Name-resolution context of one compilation unit (plus type variables)."""
    package: str
    single_imports: Dict[str, str] = field(default_factory=dict)
    on_demand: List[str] = field(default_factory=list)
    local_types: Dict[str, str] = field(default_factory=dict)
    type_vars: Dict[str, str] = field(default_factory=dict)

    def with_type_vars(self, extra: Dict[str, str]) -> "_Scope":
        merged = dict(self.type_vars)
        merged.update(extra)
        return _Scope(self.package, self.single_imports, self.on_demand, self.local_types, merged)


class JavaAdapter:
    """
    Java source -> TypeDescriptor loader.
    Looks types up on a source path (directories and .jar/.zip archives of
    .java files, laid out by package), parses the hit with javalang and
    registers every type of that compilation unit in a TypeGraph.

    Includes:
      - In-memory compilation units (parsed eagerly, errors collected)
      - Built-in catalog of common JDK interfaces
      - Import / same-package / java.lang name resolution
      - Erasure of generics, arrays and varargs to canonical names
      - Implicit default constructors and implicit interface modifiers
    """

    language = "java"

    def __init__(
        self,
        source_path: Optional[Sequence[Path | str]] = None,
        files: Optional[Mapping[str, str]] = None,
    ) -> None:
        roots = config.SOURCE_PATH if source_path is None else source_path
        self.roots: List[Path] = [Path(r) for r in roots]
        self.graph = TypeGraph()
        self._missing: Set[str] = set()
        # names with no exact <pkg>/<Name>.java under any root
        self._absent: Set[str] = set()
        self._archive_names: Dict[Path, Set[str]] = {}

        self._known: Set[str] = set()

        # index every in-memory unit before describing any, so cross-file
        # references resolve regardless of dict order
        errors: List[Dict[str, str]] = []
        parsed = []
        for name, code in (files or {}).items():
            try:
                tree = self.parse_to_ast(code, name)
            except SourceParseFailure as e:
                errors.append({"file": name, "error": str(e)})
                continue
            parsed.append((tree, name))
            self._known.update(full for _, full, _ in self._declarations(tree))
        for tree, name in parsed:
            self._register_tree(tree, name)
        self.graph.g.graph["parse_errors"] = errors

    # ---------------- Helpers ----------------

    def _visibility_from_mods(self, mods: set[str] | None) -> str:
        mods = mods or set()
        if "public" in mods:
            return "public"
        if "private" in mods:
            return "private"
        if "protected" in mods:
            return "protected"
        return "package"

    def _flags_from_mods(self, mods: set[str] | None) -> Tuple[bool, bool, bool]:
        """
        Returns (is_static, is_abstract, is_final)
        """
        mods = mods or set()
        return ("static" in mods, "abstract" in mods, "final" in mods)

    @staticmethod
    def _relative_source(name: str) -> str:
        return name.replace(".", "/") + ".java"

    # ---------------- Source lookup ----------------

    def _archive_entries(self, root: Path) -> Set[str]:
        names = self._archive_names.get(root)
        if names is None:
            try:
                with zipfile.ZipFile(root) as zf:
                    names = set(zf.namelist())
            except (OSError, zipfile.BadZipFile) as e:
                raise ArchiveReadFailure(f"Couldn't read archive {root}: {e}")
            self._archive_names[root] = names
        return names

    def _read_from_root(self, root: Path, rel: str) -> Optional[str]:
        if root.suffix.lower() in ARCHIVE_SUFFIXES and root.is_file():
            if rel not in self._archive_entries(root):
                return None
            try:
                with zipfile.ZipFile(root) as zf:
                    return zf.read(rel).decode(config.SOURCE_ENCODING)
            except (OSError, zipfile.BadZipFile, UnicodeDecodeError) as e:
                raise ArchiveReadFailure(f"Couldn't read {rel} from {root}: {e}")

        candidate = root / rel
        if not candidate.is_file():
            return None
        try:
            return candidate.read_text(encoding=config.SOURCE_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceParseFailure(f"Couldn't read {candidate}: {e}")

    def _has_source(self, root: Path, rel: str) -> bool:
        if root.suffix.lower() in ARCHIVE_SUFFIXES and root.is_file():
            return rel in self._archive_entries(root)
        return (root / rel).is_file()

    def _find_source(self, name: str) -> Optional[Tuple[str, str]]:
        """
        Locate the compilation unit declaring `name`. For a.b.Outer.Inner
        both a/b/Outer/Inner.java and a/b/Outer.java are candidates.
        """
        parts = name.split(".")
        for end in range(len(parts), 0, -1):
            rel = "/".join(parts[:end]) + ".java"
            for root in self.roots:
                code = self._read_from_root(root, rel)
                if code is not None:
                    return code, str(root / rel)
        if name in JDK_SOURCES:
            return JDK_SOURCES[name], f"<jdk>/{self._relative_source(name)}"
        return None

    def _exists(self, name: str) -> bool:
        if name in self.graph or name in self._known or name in JDK_SOURCES:
            return True
        if name in self._missing or name in self._absent:
            return False
        pkg, _, simple = name.rpartition(".")
        if simple in JDK_PACKAGES.get(pkg, ()):
            return True
        rel = self._relative_source(name)
        if any(self._has_source(root, rel) for root in self.roots):
            return True
        self._absent.add(name)
        return False

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str, origin: str = "<memory>"):
        try:
            return javalang.parse.parse(code)
        except javalang.parser.JavaParserBaseException as e:
            raise SourceParseFailure(f"Java syntax error in {origin}: {getattr(e, 'description', None) or e}")
        except (javalang.tokenizer.LexerError, StopIteration) as e:
            raise SourceParseFailure(f"Failed to parse Java code in {origin}: {e}")

    def load(self, name: str) -> TypeDescriptor:
        """
        Return the descriptor of a canonical type name, parsing its
        compilation unit on first use.
        """
        if name in PRIMITIVE_TYPES:
            return primitive_descriptor(name)
        td = self.graph.get(name)
        if td is not None:
            return td
        if name in self._missing:
            raise TypeNotFound(f"Type {name} not found on the source path")

        found = self._find_source(name)
        if found is not None:
            code, origin = found
            logger.debug("loading %s from %s", name, origin)
            self._register_unit(code, origin)
            td = self.graph.get(name)
            if td is not None:
                return td

        self._missing.add(name)
        raise TypeNotFound(f"Type {name} not found on the source path")

    def is_assignable_from(self, target: str, source: str) -> bool:
        self._load_ancestry(source)
        return self.graph.is_assignable_from(target, source)

    def _load_ancestry(self, name: str) -> None:
        pending = [name.rstrip("[]")]
        seen: Set[str] = set()
        while pending:
            current = pending.pop()
            if current in seen or current in PRIMITIVE_TYPES or current == OBJECT:
                continue
            seen.add(current)
            try:
                td = self.load(current)
            except TypeNotFound:
                logger.debug("ancestry of %s stops at unknown type %s", name, current)
                continue
            pending.extend(td.supertypes)

    # ---------------- Core processing ----------------

    def _register_unit(self, code: str, origin: str) -> None:
        self._register_tree(self.parse_to_ast(code, origin), origin)

    def _declarations(self, tree) -> List[Tuple[object, str, bool]]:
        """(declaration, canonical name, nested-in-interface) for every type in a unit."""
        package_name = getattr(getattr(tree, "package", None), "name", None) or ""
        declared: List[Tuple[object, str, bool]] = []

        def collect(decl, full_name: str, in_interface: bool) -> None:
            declared.append((decl, full_name, in_interface))
            is_iface = isinstance(decl, javalang.tree.InterfaceDeclaration)
            for member in self._body_of(decl):
                if isinstance(member, javalang.tree.TypeDeclaration):
                    collect(member, f"{full_name}.{member.name}", is_iface)

        for t in tree.types:
            collect(t, f"{package_name}.{t.name}" if package_name else t.name, False)
        return declared

    def _register_tree(self, tree, origin: str) -> None:
        package_name = getattr(getattr(tree, "package", None), "name", None) or ""

        scope = _Scope(package=package_name)
        for imp in tree.imports or []:
            if imp.static:
                continue
            if imp.wildcard:
                if imp.path not in scope.on_demand:
                    scope.on_demand.append(imp.path)
            else:
                scope.single_imports[imp.path.split(".")[-1]] = imp.path

        declared = self._declarations(tree)
        for decl, full_name, _ in declared:
            scope.local_types.setdefault(decl.name, full_name)

        for decl, full_name, in_interface in declared:
            td = self._describe(decl, full_name, package_name, scope, in_interface, origin)
            self.graph.add_type(td)
            self._missing.discard(full_name)

    @staticmethod
    def _body_of(decl) -> list:
        body = getattr(decl, "body", None)
        if isinstance(body, list):
            return [m for m in body if m is not None]
        return [m for m in getattr(body, "declarations", None) or [] if m is not None]

    def _describe(
        self,
        decl,
        full_name: str,
        package_name: str,
        scope: _Scope,
        in_interface: bool,
        origin: str,
    ) -> TypeDescriptor:
        kind = _KIND_BY_DECL.get(type(decl).__name__, "class")
        mods = set(decl.modifiers or set())
        if in_interface:
            mods.update({"public", "static"})
        if kind == "enum":
            mods.add("final")
        visibility = self._visibility_from_mods(mods)

        tscope = scope.with_type_vars(self._erase_type_params(getattr(decl, "type_parameters", None), scope))

        superclass: Optional[str] = None
        interfaces: Tuple[str, ...] = ()
        if kind == "class":
            superclass = self.resolve_type(decl.extends, tscope) if decl.extends else OBJECT
            interfaces = tuple(self.resolve_type(i, tscope) for i in decl.implements or [])
        elif kind == "interface":
            interfaces = tuple(self.resolve_type(i, tscope) for i in decl.extends or [])
        elif kind == "enum":
            superclass = "java.lang.Enum"
            interfaces = tuple(self.resolve_type(i, tscope) for i in decl.implements or [])

        constructors: Tuple[ConstructorDescriptor, ...] = ()
        methods: Tuple[MethodDescriptor, ...] = ()
        if kind in ("class", "interface"):
            methods = tuple(
                self._describe_method(m, full_name, tscope, kind == "interface")
                for m in self._body_of(decl)
                if isinstance(m, javalang.tree.MethodDeclaration)
            )
        if kind == "class":
            constructors = tuple(
                self._describe_constructor(c, full_name, tscope)
                for c in self._body_of(decl)
                if isinstance(c, javalang.tree.ConstructorDeclaration)
            )
            if not constructors:
                # implicit default constructor takes the class's own access
                constructors = (ConstructorDescriptor(declaring_type=full_name, visibility=visibility),)

        simple = full_name.split(".")[-1]
        return TypeDescriptor(
            name=full_name,
            simple_name=simple,
            kind=kind,
            package=package_name,
            visibility=visibility,
            modifiers=tuple(sorted(mods)),
            superclass=superclass,
            interfaces=interfaces,
            constructors=constructors,
            methods=methods,
            source_file=origin,
        )

    def _describe_method(self, method, owner: str, scope: _Scope, in_interface: bool) -> MethodDescriptor:
        mods = set(method.modifiers or set())
        is_static, is_abs, is_final = self._flags_from_mods(mods)
        if in_interface:
            # no body and not static: implicitly abstract; everything but private is public
            is_abs = method.body is None and not is_static
            visibility = "private" if "private" in mods else "public"
        else:
            visibility = self._visibility_from_mods(mods)

        mscope = scope.with_type_vars(self._erase_type_params(method.type_parameters, scope))
        return MethodDescriptor(
            declaring_type=owner,
            name=method.name,
            return_type=self.resolve_type(method.return_type, mscope),
            parameter_types=self._parameter_types(method.parameters, mscope),
            exception_types=self._exception_types(method.throws, mscope),
            visibility=visibility,
            is_abstract=is_abs,
            is_static=is_static,
            is_final=is_final,
        )

    def _describe_constructor(self, ctor, owner: str, scope: _Scope) -> ConstructorDescriptor:
        cscope = scope.with_type_vars(self._erase_type_params(ctor.type_parameters, scope))
        return ConstructorDescriptor(
            declaring_type=owner,
            parameter_types=self._parameter_types(ctor.parameters, cscope),
            exception_types=self._exception_types(ctor.throws, cscope),
            visibility=self._visibility_from_mods(ctor.modifiers),
        )

    def _parameter_types(self, params, scope: _Scope) -> Tuple[str, ...]:
        out = []
        for p in params or []:
            erased = self.resolve_type(p.type, scope)
            out.append(erased + "[]" if p.varargs else erased)
        return tuple(out)

    def _exception_types(self, throws, scope: _Scope) -> Tuple[str, ...]:
        return tuple(self.resolve_name(t.split("."), scope) for t in throws or [])

    # ---------------- Name resolution ----------------

    def _erase_type_params(self, params, scope: _Scope) -> Dict[str, str]:
        """Type variable -> erasure (leftmost bound, else Object)."""
        erased: Dict[str, str] = {}
        for tp in params or []:
            bounds = tp.extends or []
            if bounds:
                erased[tp.name] = self.resolve_type(bounds[0], scope.with_type_vars(erased))
            else:
                erased[tp.name] = OBJECT
        return erased

    def resolve_type(self, t, scope: _Scope) -> str:
        """
        From a javalang Type node derive the canonical erased name,
        e.g. List<Item>[] -> java.util.List[]. None means void.
        """
        if t is None:
            return "void"
        dims = "[]" * len(getattr(t, "dimensions", None) or [])
        if isinstance(t, javalang.tree.BasicType):
            return t.name + dims

        segments: List[str] = []
        node = t
        while node is not None:
            segments.append(node.name)
            node = getattr(node, "sub_type", None)

        if len(segments) == 1 and segments[0] in scope.type_vars:
            return scope.type_vars[segments[0]] + dims
        return self.resolve_name(segments, scope) + dims

    def resolve_name(self, segments: List[str], scope: _Scope) -> str:
        head, rest = segments[0], segments[1:]
        base = self._resolve_simple(head, scope)
        if base is not None:
            return ".".join([base] + rest)
        if rest:
            # already fully qualified
            return ".".join(segments)

        # packages whose members are listed cannot hold an unresolved name
        guesses = [pkg for pkg in scope.on_demand if pkg not in JDK_PACKAGES]
        if len(guesses) > 1:
            raise TypeNotFound(
                f"Type {head} is not on the source path and could come from any of: {', '.join(guesses)}"
            )
        fallback_pkg = guesses[0] if guesses else scope.package
        resolved = f"{fallback_pkg}.{head}" if fallback_pkg else head
        logger.warning("could not resolve type %s, assuming %s", head, resolved)
        return resolved

    def _resolve_simple(self, simple: str, scope: _Scope) -> Optional[str]:
        if simple in scope.local_types:
            return scope.local_types[simple]
        if simple in scope.single_imports:
            return scope.single_imports[simple]
        same_pkg = f"{scope.package}.{simple}" if scope.package else simple
        if self._exists(same_pkg):
            return same_pkg
        matches = [f"{pkg}.{simple}" for pkg in scope.on_demand if self._exists(f"{pkg}.{simple}")]
        if len(matches) > 1:
            raise TypeNotFound(f"Type {simple} is ambiguous: {', '.join(matches)}")
        if matches:
            return matches[0]
        if simple in JAVA_LANG or self._exists(f"java.lang.{simple}"):
            return f"java.lang.{simple}"
        return None
