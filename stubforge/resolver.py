"""
Decides which members the stub has to declare.

Methods are resolved with two independent folds over the materialized
ancestor chain:

  1. collect: every abstract method seen at any level, by MethodKey.
     A later descriptor for a key replaces the earlier one, but the key
     keeps the position where it was first seen.
  2. concrete: every non-abstract method seen at any level, by MethodKey.

A key is then dropped when any concrete method in the hierarchy
implements it, no matter at which level either side was declared.

The return-type check between the two sides is one-directional: the
abstract declaration's return type must be assignable from the concrete
one's. Concrete methods returning a wider type than the abstract slot do
not suppress it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Sequence, Tuple

from stubforge.cir.model import (
    ConstructorDescriptor,
    MethodDescriptor,
    MethodKey,
    TypeDescriptor,
    TypeLevel,
)
from stubforge.errors import NoAccessibleConstructor, UnsupportedTarget

logger = logging.getLogger(__name__)

# is_assignable_from(target, source)
Assignability = Callable[[str, str], bool]


class Decision(str, Enum):
    KEEP = "keep"
    DROP = "drop"


@dataclass(frozen=True)
class Resolution:
    target: TypeDescriptor
    constructors: Tuple[ConstructorDescriptor, ...]
    members: Mapping[MethodKey, MethodDescriptor]
    decisions: Mapping[MethodKey, Decision]


def same_slot(a: MethodDescriptor, b: MethodDescriptor) -> bool:
    return a.key == b.key


def suppresses(concrete: MethodDescriptor, abstract: MethodDescriptor, assignable: Assignability) -> bool:
    """
    True when `concrete` satisfies the slot of `abstract`.
    Only the abstract side's return type is asked to accept the concrete
    side's, never the reverse.
    """
    return same_slot(concrete, abstract) and assignable(abstract.return_type, concrete.return_type)


def _walk(levels: Sequence[TypeLevel]) -> Iterator[MethodDescriptor]:
    for level in levels:
        yield from level.declared
        yield from level.exposed


def collect_abstract(levels: Sequence[TypeLevel]) -> Mapping[MethodKey, MethodDescriptor]:
    acc: Dict[MethodKey, MethodDescriptor] = {}
    for m in _walk(levels):
        if m.is_abstract:
            acc[m.key] = m
    return MappingProxyType(acc)


def collect_concrete(levels: Sequence[TypeLevel]) -> Mapping[MethodKey, Tuple[MethodDescriptor, ...]]:
    acc: Dict[MethodKey, List[MethodDescriptor]] = {}
    for m in _walk(levels):
        if not m.is_abstract:
            acc.setdefault(m.key, []).append(m)
    return MappingProxyType({k: tuple(v) for k, v in acc.items()})


def decide(
    abstract: Mapping[MethodKey, MethodDescriptor],
    concrete: Mapping[MethodKey, Tuple[MethodDescriptor, ...]],
    assignable: Assignability,
) -> Mapping[MethodKey, Decision]:
    decisions: Dict[MethodKey, Decision] = {}
    for key, declared in abstract.items():
        implementors = concrete.get(key, ())
        if any(suppresses(c, declared, assignable) for c in implementors):
            decisions[key] = Decision.DROP
        else:
            decisions[key] = Decision.KEEP
    return MappingProxyType(decisions)


def select_constructors(td: TypeDescriptor) -> Tuple[ConstructorDescriptor, ...]:
    """
    Non-private constructors declared on td itself. Interfaces need none;
    any other target without one cannot be extended.
    """
    if td.is_interface:
        return ()
    usable = tuple(c for c in td.constructors if not c.is_private)
    if not usable:
        raise NoAccessibleConstructor(f"Class {td.name} has no non-private constructor")
    return usable


def check_target(td: TypeDescriptor) -> None:
    if td.is_primitive:
        raise UnsupportedTarget(f"Type {td.name} is primitive")
    if td.is_final:
        raise UnsupportedTarget(f"Class {td.name} is final")
    if td.kind in ("enum", "annotation"):
        raise UnsupportedTarget(f"Type {td.name} is an {td.kind} and cannot be implemented")


def resolve(td: TypeDescriptor, levels: Sequence[TypeLevel], assignable: Assignability) -> Resolution:
    check_target(td)
    constructors = select_constructors(td)
    abstract = collect_abstract(levels)
    decisions = decide(abstract, collect_concrete(levels), assignable)
    members = MappingProxyType({k: m for k, m in abstract.items() if decisions[k] is Decision.KEEP})
    for key in members:
        logger.debug("stubbing %s", key)
    return Resolution(target=td, constructors=constructors, members=members, decisions=decisions)
