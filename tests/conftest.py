"""Shared fixtures for building analysis snapshots in tests."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import pytest

from docgraph.graph.id_utils import identify
from docgraph.graph.models.doc_graph import DocGraph
from docgraph.graph.snapshot import SnapshotHost
from docgraph.runtime.api import extract_doc_graph


class SnapshotBuilder:
    """Fluent helper producing snapshot documents with unique declaration spans."""

    def __init__(self, package: Optional[str] = "pkg") -> None:
        self.data: Dict[str, object] = {"package": package, "roots": {}, "symbols": {}}
        self._offset = 0

    def symbol(
        self,
        key: str,
        kind: str = "variable",
        name: Optional[str] = None,
        file_path: Optional[str] = None,
        external: bool = False,
        include: bool = True,
        exports: Optional[Dict[str, Optional[str]]] = None,
        references: Iterable[str] = (),
        members: Iterable[str] = (),
        reference: Optional[Dict[str, str]] = None,
    ) -> "SnapshotBuilder":
        self._offset += 10
        site = {
            "kind": kind,
            "file_path": file_path or f"/src/{key}.ts",
            "start": self._offset,
            "end": self._offset + 5,
            "include": include,
            "exports": dict(exports or {}),
            "references": list(references),
            "members": list(members),
        }
        entry = {"name": name or key, "external": external, "declarations": [site]}
        if reference is not None:
            entry["reference"] = dict(reference)
        self.data["symbols"][key] = entry
        return self

    def sentinel(self, key: str, name: str) -> "SnapshotBuilder":
        self.data["symbols"][key] = {"name": name, "declarations": []}
        return self

    def root(self, key: str, display_name: str) -> "SnapshotBuilder":
        self.data["roots"][key] = display_name
        return self

    def host(self) -> SnapshotHost:
        return SnapshotHost.from_dict(self.data)

    def run(self, **kwargs) -> DocGraph:
        host = self.host()
        return extract_doc_graph(host, host.roots(), **kwargs)

    def id_of(self, key: str) -> str:
        return identify(self.host().symbol(key))


@pytest.fixture
def builder() -> SnapshotBuilder:
    """Fresh snapshot builder for package ``pkg``."""
    return SnapshotBuilder()


@pytest.fixture
def scenario_builder() -> SnapshotBuilder:
    """Package ``pkg`` whose root module exports ``a -> S1`` directly and through namespace ``b``."""
    b = SnapshotBuilder()
    b.symbol("M", kind="module", name="index", exports={"a": "S1", "b": "N"})
    b.symbol("N", kind="namespace", name="N", exports={"c": "S1"})
    b.symbol("S1", kind="class", name="S1")
    b.root("M", "pkg")
    return b
