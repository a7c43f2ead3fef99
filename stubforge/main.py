from typing import Dict, List

from fastapi import FastAPI, HTTPException # type: ignore
from pydantic import BaseModel, Field # type: ignore

from stubforge.emitter import impl_name
from stubforge.errors import ImplementorError
from stubforge.implementor import Implementor

app = FastAPI(title="stubforge")


class ImplementRequest(BaseModel):
    files: Dict[str, str] = Field(default_factory=dict, description="path -> Java source")
    type_name: str


class HierarchyRequest(BaseModel):
    files: Dict[str, str] = Field(default_factory=dict)
    type_name: str


def _implementor(files: Dict[str, str]) -> Implementor:
    # only the posted sources (plus the JDK catalog) are visible to the request
    return Implementor(source_path=[], files=files)


@app.post("/implement")
def implement(req: ImplementRequest):
    try:
        resolution, source = _implementor(req.files).render(req.type_name)
    except ImplementorError as e:
        raise HTTPException(status_code=422, detail=str(e))

    td = resolution.target
    return {
        "type_name": td.name,
        "impl_name": impl_name(td),
        "source": source,
        "members": [str(k) for k in resolution.members],
        "constructors": [list(c.parameter_types) for c in resolution.constructors],
    }


@app.post("/hierarchy")
def hierarchy(req: HierarchyRequest):
    try:
        levels, graph = _implementor(req.files).hierarchy(req.type_name)
    except ImplementorError as e:
        raise HTTPException(status_code=422, detail=str(e))

    chain: List[Dict] = []
    for lvl in levels:
        chain.append({
            "type": lvl.type.name,
            "kind": lvl.type.kind,
            "declared": [str(m.key) for m in lvl.declared],
            "exposed": [str(m.key) for m in lvl.exposed],
        })
    return {"chain": chain, "graph": graph}
