import pytest

from stubforge.cir.model import OBJECT, ConstructorDescriptor, MethodDescriptor, TypeDescriptor
from stubforge.emitter import (
    default_value,
    render_constructor,
    render_method,
    render_source,
    source_path,
    write_source,
)
from stubforge.errors import EmissionIOFailure

GREETER = TypeDescriptor(name="demo.Greeter", simple_name="Greeter", kind="interface", package="demo",
                         visibility="public")
GREET = MethodDescriptor(declaring_type="demo.Greeter", name="greet", return_type="java.lang.String",
                         visibility="public", is_abstract=True)


def test_interface_stub_returns_null_for_references():
    assert render_source(GREETER, [], [GREET]) == (
        "package demo;\n"
        "\n"
        "public class GreeterImpl implements demo.Greeter {\n"
        "\n"
        "\tpublic java.lang.String greet() {\n"
        "\t\treturn null;\n"
        "\t}\n"
        "\n"
        "}\n"
    )


def test_constructor_passes_fresh_parameters_to_super():
    ctor = ConstructorDescriptor("demo.Account", ("int", "java.lang.String"), ("java.io.IOException",), "protected")

    assert render_constructor(ctor, "AccountImpl") == (
        "\tprotected AccountImpl(int arg1, java.lang.String arg2) throws java.io.IOException {\n"
        "\t\tsuper(arg1, arg2);\n"
        "\t}"
    )


def test_package_private_members_get_no_access_keyword():
    ctor = ConstructorDescriptor("demo.Account", (), (), "package")
    assert render_constructor(ctor, "AccountImpl").startswith("\tAccountImpl() {")

    m = MethodDescriptor("demo.Account", "touch", "void", ("long[]",), visibility="package", is_abstract=True)
    assert render_method(m) == "\tvoid touch(long[] arg1) {\n\t}"


def test_static_flag_and_throws_are_copied():
    m = MethodDescriptor("demo.X", "load", "boolean", ("java.lang.String",), ("java.io.IOException", "java.lang.InterruptedException"),
                         visibility="protected", is_static=True)
    assert render_method(m) == (
        "\tprotected static boolean load(java.lang.String arg1)"
        " throws java.io.IOException, java.lang.InterruptedException {\n"
        "\t\treturn false;\n"
        "\t}"
    )


@pytest.mark.parametrize("return_type, expected", [
    ("boolean", "false"),
    ("int", "0"),
    ("byte", "0"),
    ("short", "0"),
    ("long", "0L"),
    ("float", "0.0f"),
    ("double", "0.0"),
    ("char", "'\\0'"),
    ("void", None),
    ("int[]", "null"),
    (OBJECT, "null"),
])
def test_default_values(return_type, expected):
    assert default_value(return_type) == expected


def test_class_stub_extends_and_skips_final_or_private_methods():
    base = TypeDescriptor(name="demo.Base", simple_name="Base", kind="class", package="demo", superclass=OBJECT)
    ctor = ConstructorDescriptor("demo.Base", visibility="public")
    methods = [
        MethodDescriptor("demo.Base", "size", "int", visibility="public", is_abstract=True),
        MethodDescriptor("demo.Base", "locked", "int", visibility="public", is_final=True),
        MethodDescriptor("demo.Base", "hidden", "int", visibility="private"),
    ]
    text = render_source(base, [ctor], methods)

    assert "public class BaseImpl extends demo.Base {" in text
    assert "\tpublic BaseImpl() {\n\t\tsuper();\n\t}" in text
    assert "size()" in text
    assert "locked" not in text and "hidden" not in text


def test_default_package_has_no_package_clause(tmp_path):
    td = TypeDescriptor(name="Plain", simple_name="Plain", kind="interface")

    assert render_source(td, [], []).startswith("public class PlainImpl implements Plain {")
    assert source_path(td, tmp_path) == tmp_path / "PlainImpl.java"


def test_write_source_lays_out_package_directories(tmp_path):
    path = write_source(GREETER, tmp_path, [], [GREET])

    assert path == tmp_path / "demo" / "GreeterImpl.java"
    assert path.read_text(encoding="utf-8") == render_source(GREETER, [], [GREET])


def test_unwritable_root_raises_emission_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(EmissionIOFailure):
        write_source(GREETER, blocker, [], [GREET])
