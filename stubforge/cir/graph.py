import networkx as nx # type: ignore
from typing import Any, Dict, Set

from stubforge.cir.model import OBJECT, PRIMITIVE_TYPES, TypeDescriptor

_ARRAY_SUPERTYPES = {OBJECT, "java.lang.Cloneable", "java.io.Serializable"}


class TypeGraph:
    """
    Directed subtype graph over canonical (erased) type names.
    Nodes: type names, payload = TypeDescriptor once the type is loaded.
    Edges: subtype -> supertype, etype EXTENDS or IMPLEMENTS.
    Supertypes that were never loaded still appear as bare nodes.
    """
    def __init__(self) -> None:
        self.g = nx.DiGraph()

    def add_type(self, td: TypeDescriptor) -> None:
        self.g.add_node(td.name, kind=td.kind, payload=td)
        if td.superclass:
            self.add_edge(td.name, td.superclass, "EXTENDS")
        for iface in td.interfaces:
            self.add_edge(td.name, iface, "IMPLEMENTS")

    def add_edge(self, src: str, dst: str, etype: str) -> None:
        if dst not in self.g:
            self.g.add_node(dst, kind=None, payload=None)
        self.g.add_edge(src, dst, etype=etype)

    def __contains__(self, name: str) -> bool:
        return name in self.g and self.g.nodes[name].get("payload") is not None

    def get(self, name: str) -> TypeDescriptor | None:
        if name not in self.g:
            return None
        return self.g.nodes[name].get("payload")

    def ancestors(self, name: str) -> Set[str]:
        """All known supertypes of name, transitively (name excluded)."""
        if name not in self.g:
            return set()
        return set(nx.descendants(self.g, name))

    def is_assignable_from(self, target: str, source: str) -> bool:
        """
        Erasure-level check that a value of type `source` can be stored in
        a variable of type `target`. Types the graph never saw are only
        assignable to themselves and to Object.
        """
        if target == source:
            return True
        if target in PRIMITIVE_TYPES or source in PRIMITIVE_TYPES:
            return False
        if target == OBJECT:
            return True
        if source.endswith("[]"):
            if target.endswith("[]"):
                t_elem, s_elem = target[:-2], source[:-2]
                if s_elem in PRIMITIVE_TYPES or t_elem in PRIMITIVE_TYPES:
                    return False
                return self.is_assignable_from(t_elem, s_elem)
            return target in _ARRAY_SUPERTYPES
        if target.endswith("[]"):
            return False
        return target in self.ancestors(source)

    def to_debug_json(self) -> Dict[str, Any]:
        """
        Convert graph to JSON-like dict for debugging / API responses.
        """
        nodes = []
        for node_id, data in self.g.nodes(data=True):
            payload = data.get("payload")
            nodes.append({
                "id": node_id,
                "kind": data.get("kind"),
                "loaded": payload is not None,
                "source_file": getattr(payload, "source_file", None),
            })

        edges = []
        for src, dst, data in self.g.edges(data=True):
            edges.append({
                "src": src,
                "dst": dst,
                "type": data.get("etype"),
            })

        return {"nodes": nodes, "edges": edges}
