from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from stubforge.adapters.java_adapter import JavaAdapter
from stubforge.cir.model import OBJECT, MethodDescriptor, MethodKey, TypeDescriptor, TypeLevel
from stubforge.errors import TypeNotFound, UnsupportedTarget

logger = logging.getLogger(__name__)


class TypeIntrospector:
    """
    Walks the superclass chain of a type, from the type itself up to but
    excluding java.lang.Object, and materializes one TypeLevel per step.
    An interface's chain is the interface alone; its superinterfaces only
    contribute through the exposed view. A supertype missing from the
    source path raises TypeNotFound.
    """

    def __init__(self, adapter: JavaAdapter) -> None:
        self.adapter = adapter
        self._exposed_cache: Dict[str, Tuple[MethodDescriptor, ...]] = {}

    def levels(self, td: TypeDescriptor) -> List[TypeLevel]:
        if td.is_primitive:
            raise UnsupportedTarget(f"Type {td.name} is primitive")

        out: List[TypeLevel] = []
        current: TypeDescriptor | None = td
        while current is not None and current.name != OBJECT:
            out.append(
                TypeLevel(
                    type=current,
                    constructors=current.constructors,
                    declared=current.methods,
                    exposed=self.exposed(current),
                )
            )
            current = self._superclass(current)
        logger.debug("ancestor chain of %s: %s", td.name, [lvl.type.name for lvl in out])
        return out

    def _superclass(self, td: TypeDescriptor) -> TypeDescriptor | None:
        if td.is_interface or not td.superclass or td.superclass == OBJECT:
            return None
        return self._supertype(td.superclass, td, "superclass")

    def _supertype(self, name: str, sub: TypeDescriptor, role: str) -> TypeDescriptor:
        # an unseen supertype may declare abstract methods the stub has to cover
        try:
            return self.adapter.load(name)
        except TypeNotFound:
            raise TypeNotFound(f"{role.capitalize()} {name} of {sub.name} not found on the source path")

    def exposed(self, td: TypeDescriptor) -> Tuple[MethodDescriptor, ...]:
        """
        Public methods visible on td: its own, then those of its superclass
        chain, then those of its superinterfaces. A method is only inherited
        when nothing closer to td already occupies its key; static interface
        methods are never inherited.
        """
        cached = self._exposed_cache.get(td.name)
        if cached is not None:
            return cached

        own = [m for m in td.methods if m.visibility == "public"]
        taken = {m.key for m in td.methods}
        result: List[MethodDescriptor] = list(own)

        def inherit(methods: Tuple[MethodDescriptor, ...], from_interface: bool) -> List[MethodKey]:
            added: List[MethodKey] = []
            for m in methods:
                if from_interface and m.is_static:
                    continue
                if m.key in taken:
                    continue
                result.append(m)
                added.append(m.key)
            return added

        sup = self._superclass(td)
        if sup is not None:
            taken.update(inherit(self.exposed(sup), from_interface=False))

        for iface_name in td.interfaces:
            iface = self._supertype(iface_name, td, "interface")
            # unrelated interfaces may both contribute the same key
            inherit(self.exposed(iface), from_interface=True)

        exposed = tuple(result)
        self._exposed_cache[td.name] = exposed
        return exposed
