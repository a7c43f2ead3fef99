from stubforge.cir.graph import TypeGraph
from stubforge.cir.model import OBJECT, TypeDescriptor


def build_graph():
    graph = TypeGraph()
    graph.add_type(TypeDescriptor(name="p.Animal", simple_name="Animal", kind="class", package="p", superclass=OBJECT))
    graph.add_type(TypeDescriptor(
        name="p.Dog", simple_name="Dog", kind="class", package="p",
        superclass="p.Animal", interfaces=("p.Pet",),
    ))
    return graph


def test_subtypes_are_assignable_to_their_ancestors():
    graph = build_graph()

    assert graph.is_assignable_from("p.Animal", "p.Dog")
    assert graph.is_assignable_from("p.Pet", "p.Dog")
    assert graph.is_assignable_from(OBJECT, "p.Dog")
    assert not graph.is_assignable_from("p.Dog", "p.Animal")


def test_primitives_only_accept_themselves():
    graph = build_graph()

    assert graph.is_assignable_from("int", "int")
    assert not graph.is_assignable_from("long", "int")
    assert not graph.is_assignable_from(OBJECT, "int")


def test_array_assignability():
    graph = build_graph()

    assert graph.is_assignable_from(OBJECT, "int[]")
    assert graph.is_assignable_from("java.io.Serializable", "p.Dog[]")
    assert graph.is_assignable_from("p.Animal[]", "p.Dog[]")
    assert not graph.is_assignable_from("int[]", "long[]")
    assert not graph.is_assignable_from("p.Dog[]", "p.Dog")


def test_debug_json_marks_unloaded_supertypes():
    data = build_graph().to_debug_json()

    edges = {(e["src"], e["dst"], e["type"]) for e in data["edges"]}
    assert ("p.Dog", "p.Animal", "EXTENDS") in edges
    assert ("p.Dog", "p.Pet", "IMPLEMENTS") in edges

    loaded = {n["id"]: n["loaded"] for n in data["nodes"]}
    assert loaded["p.Dog"] is True
    assert loaded["p.Pet"] is False
