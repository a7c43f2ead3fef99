import pytest

from stubforge.adapters.java_adapter import JavaAdapter
from stubforge.cir.model import primitive_descriptor
from stubforge.errors import TypeNotFound, UnsupportedTarget
from stubforge.introspector import TypeIntrospector


def introspect(files, name):
    adapter = JavaAdapter(source_path=[], files=files)
    return TypeIntrospector(adapter).levels(adapter.load(name))


def keys(methods):
    return [str(m.key) for m in methods]


def test_chain_runs_up_to_object_with_both_views():
    levels = introspect(
        {
            "p/A.java": "package p; abstract class A implements Runnable { abstract int size(); }",
            "p/B.java": "package p; public abstract class B extends A { public void run() {} }",
        },
        "p.B",
    )

    assert [lvl.type.name for lvl in levels] == ["p.B", "p.A"]
    b, a = levels
    assert keys(b.declared) == ["run()"]
    # B's own run() hides Runnable.run() inherited through A
    assert keys(b.exposed) == ["run()"]
    assert not b.exposed[0].is_abstract

    assert keys(a.declared) == ["size()"]
    assert keys(a.exposed) == ["run()"]
    assert a.exposed[0].declaring_type == "java.lang.Runnable"


def test_interface_chain_is_single_level_exposing_superinterfaces():
    levels = introspect({"p/J.java": "package p; public interface J extends Runnable { void stop(); }"}, "p.J")

    assert len(levels) == 1
    assert sorted(keys(levels[0].exposed)) == ["run()", "stop()"]


def test_redeclared_abstract_method_hides_inherited_default():
    levels = introspect(
        {
            "p/I.java": "package p; public interface I { default void f() {} }",
            "p/J.java": "package p; public interface J extends I { void f(); }",
        },
        "p.J",
    )

    exposed = levels[0].exposed
    assert keys(exposed) == ["f()"]
    assert exposed[0].is_abstract


def test_static_interface_methods_are_not_inherited():
    levels = introspect(
        {
            "p/I.java": "package p; public interface I { static I of() { return null; } void g(); }",
            "p/J.java": "package p; public interface J extends I { }",
        },
        "p.J",
    )
    assert keys(levels[0].exposed) == ["g()"]


def test_missing_superclass_is_reported():
    with pytest.raises(TypeNotFound, match="Superclass com.missing.Base of p.X"):
        introspect(
            {"p/X.java": "package p; public abstract class X extends com.missing.Base { }"},
            "p.X",
        )


def test_missing_superinterface_is_reported():
    with pytest.raises(TypeNotFound, match="Interface java.util.List of p.Y"):
        introspect(
            {"p/Y.java": "package p; import java.util.List; public interface Y extends List<String> { }"},
            "p.Y",
        )


def test_marker_interfaces_and_enum_base_come_from_the_catalog():
    levels = introspect(
        {"p/V.java": "package p; public abstract class V implements java.io.Serializable, Cloneable { public abstract int size(); }"},
        "p.V",
    )
    assert keys(levels[0].exposed) == ["size()"]

    levels = introspect({"p/E.java": "package p; public enum E { A, B }"}, "p.E")
    assert [lvl.type.name for lvl in levels] == ["p.E", "java.lang.Enum"]


def test_primitive_start_is_rejected():
    introspector = TypeIntrospector(JavaAdapter(source_path=[]))
    with pytest.raises(UnsupportedTarget):
        introspector.levels(primitive_descriptor("int"))
