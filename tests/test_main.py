from fastapi.testclient import TestClient # type: ignore

from stubforge.main import app

client = TestClient(app)

FILES = {
    "demo/Shape.java": """
package demo;
public abstract class Shape {
    protected Shape(String name) { }
    public abstract double area();
    public String describe() { return "shape"; }
}
""",
    "demo/Square.java": """
package demo;
public final class Square extends Shape {
    public Square() { super("square"); }
    public double area() { return 1.0; }
}
""",
}


def test_implement_returns_stub_source():
    res = client.post("/implement", json={"files": FILES, "type_name": "demo.Shape"})

    assert res.status_code == 200
    body = res.json()
    assert body["impl_name"] == "ShapeImpl"
    assert body["members"] == ["area()"]
    assert body["constructors"] == [["java.lang.String"]]
    assert "\tprotected ShapeImpl(java.lang.String arg1) {\n\t\tsuper(arg1);\n\t}" in body["source"]
    assert "\tpublic double area() {\n\t\treturn 0.0;\n\t}" in body["source"]


def test_implement_rejects_final_class():
    res = client.post("/implement", json={"files": FILES, "type_name": "demo.Square"})

    assert res.status_code == 422
    assert "final" in res.json()["detail"]


def test_implement_unknown_type():
    res = client.post("/implement", json={"files": {}, "type_name": "demo.Nope"})
    assert res.status_code == 422


def test_hierarchy_lists_chain_and_graph():
    res = client.post("/hierarchy", json={"files": FILES, "type_name": "demo.Square"})

    assert res.status_code == 200
    body = res.json()
    assert [lvl["type"] for lvl in body["chain"]] == ["demo.Square", "demo.Shape"]
    assert body["chain"][0]["declared"] == ["area()"]
    edges = {(e["src"], e["dst"], e["type"]) for e in body["graph"]["edges"]}
    assert ("demo.Square", "demo.Shape", "EXTENDS") in edges
