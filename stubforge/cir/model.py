from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

Visibility = Literal["public", "protected", "private", "package"]
TypeKind = Literal["class", "interface", "enum", "annotation", "primitive"]

PRIMITIVE_TYPES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)
OBJECT = "java.lang.Object"


@dataclass(frozen=True)
class ConstructorDescriptor:
    declaring_type: str
    parameter_types: Tuple[str, ...] = ()
    exception_types: Tuple[str, ...] = ()
    visibility: Visibility = "package"

    @property
    def is_private(self) -> bool:
        return self.visibility == "private"


@dataclass(frozen=True)
class MethodDescriptor:
    declaring_type: str
    name: str
    return_type: str                   # canonical, erased (e.g. java.util.List)
    parameter_types: Tuple[str, ...] = ()
    exception_types: Tuple[str, ...] = ()
    visibility: Visibility = "package"
    is_abstract: bool = False
    is_static: bool = False
    is_final: bool = False

    @property
    def key(self) -> "MethodKey":
        return MethodKey(self.name, self.parameter_types)


@dataclass(frozen=True)
class MethodKey:
    """
    Override slot of a method: name plus erased parameter types.
    Return types are deliberately not part of the key; the resolver
    compares them separately and only in one direction.
    """
    name: str
    parameter_types: Tuple[str, ...] = ()

    def sort_key(self) -> Tuple[str, int, Tuple[str, ...]]:
        return (self.name, len(self.parameter_types), self.parameter_types)

    def __str__(self) -> str:
        return f"{self.name}({', '.join(self.parameter_types)})"


@dataclass(frozen=True)
class TypeDescriptor:
    name: str                          # canonical name, e.g. a.b.Outer.Inner
    simple_name: str
    kind: TypeKind
    package: str = ""
    visibility: Visibility = "package"
    modifiers: Tuple[str, ...] = ()
    superclass: Optional[str] = None
    interfaces: Tuple[str, ...] = ()
    constructors: Tuple[ConstructorDescriptor, ...] = ()
    methods: Tuple[MethodDescriptor, ...] = ()
    source_file: Optional[str] = field(default=None, compare=False)

    @property
    def is_interface(self) -> bool:
        return self.kind == "interface"

    @property
    def is_primitive(self) -> bool:
        return self.kind == "primitive"

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    @property
    def supertypes(self) -> Tuple[str, ...]:
        head = (self.superclass,) if self.superclass else ()
        return head + self.interfaces


@dataclass(frozen=True)
class TypeLevel:
    """
    One materialized step of the ancestor chain.
    declared: methods written on this type itself.
    exposed:  public methods visible on this type, inherited ones included.
    """
    type: TypeDescriptor
    constructors: Tuple[ConstructorDescriptor, ...] = ()
    declared: Tuple[MethodDescriptor, ...] = ()
    exposed: Tuple[MethodDescriptor, ...] = ()


def primitive_descriptor(name: str) -> TypeDescriptor:
    return TypeDescriptor(name=name, simple_name=name, kind="primitive", visibility="public")
