from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from stubforge import config
from stubforge.cir.model import ConstructorDescriptor, MethodDescriptor, TypeDescriptor
from stubforge.errors import EmissionIOFailure

logger = logging.getLogger(__name__)

# default return value by primitive return type; references get null
_DEFAULTS = {
    "boolean": "false",
    "byte": "0",
    "short": "0",
    "int": "0",
    "long": "0L",
    "float": "0.0f",
    "double": "0.0",
    "char": "'\\0'",
}


def impl_name(td: TypeDescriptor) -> str:
    return td.simple_name + config.IMPL_SUFFIX


def source_path(td: TypeDescriptor, root: Path) -> Path:
    """<root>/<package dirs>/<Simple>Impl.java"""
    pkg_dir = root.joinpath(*td.package.split(".")) if td.package else root
    return pkg_dir / f"{impl_name(td)}.java"


def default_value(return_type: str) -> str | None:
    if return_type == "void":
        return None
    return _DEFAULTS.get(return_type, "null")


def _modifiers(visibility: str, is_static: bool = False) -> str:
    out = ""
    if visibility in ("public", "protected"):
        out += visibility + " "
    if is_static:
        out += "static "
    return out


def _parameters(types: Sequence[str]) -> str:
    return ", ".join(f"{t} arg{i}" for i, t in enumerate(types, start=1))


def _throws(exceptions: Sequence[str]) -> str:
    if not exceptions:
        return ""
    return " throws " + ", ".join(exceptions)


def render_constructor(ctor: ConstructorDescriptor, class_name: str) -> str:
    ind = config.INDENT
    args = ", ".join(f"arg{i}" for i in range(1, len(ctor.parameter_types) + 1))
    return (
        f"{ind}{_modifiers(ctor.visibility)}{class_name}({_parameters(ctor.parameter_types)})"
        f"{_throws(ctor.exception_types)} {{\n"
        f"{ind * 2}super({args});\n"
        f"{ind}}}"
    )


def render_method(method: MethodDescriptor) -> str:
    ind = config.INDENT
    lines = [
        f"{ind}{_modifiers(method.visibility, method.is_static)}{method.return_type} {method.name}"
        f"({_parameters(method.parameter_types)}){_throws(method.exception_types)} {{"
    ]
    value = default_value(method.return_type)
    if value is not None:
        lines.append(f"{ind * 2}return {value};")
    lines.append(f"{ind}}}")
    return "\n".join(lines)


def render_source(
    td: TypeDescriptor,
    constructors: Iterable[ConstructorDescriptor],
    methods: Iterable[MethodDescriptor],
) -> str:
    """
    Full compilation unit of the stub. Pure: the same inputs always give
    the same text.
    """
    name = impl_name(td)
    relation = "implements" if td.is_interface else "extends"

    parts: List[str] = []
    if td.package:
        parts.append(f"package {td.package};\n\n")
    parts.append(f"public class {name} {relation} {td.name} {{")

    for ctor in constructors:
        parts.append("\n\n" + render_constructor(ctor, name))
    for method in methods:
        if method.is_final or method.visibility == "private":
            continue
        parts.append("\n\n" + render_method(method))

    parts.append("\n\n}\n")
    return "".join(parts)


def write_source(
    td: TypeDescriptor,
    root: Path,
    constructors: Iterable[ConstructorDescriptor],
    methods: Iterable[MethodDescriptor],
) -> Path:
    text = render_source(td, constructors, methods)
    path = source_path(td, Path(root))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding=config.SOURCE_ENCODING, newline="\n") as f:
            f.write(text)
    except OSError as e:
        raise EmissionIOFailure(f"Couldn't write {path}: {e}")
    logger.info("wrote %s", path)
    return path
