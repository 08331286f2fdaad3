"""Tests for docgraph CLI entrypoints."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import docgraph.main as main


def _write_snapshot(tmp_path: Path, data) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_main_dispatches_extract_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Verify that `main` parses args and dispatches extract_command."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    captured = {}

    def fake_extract_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "extract_command", fake_extract_command)

    exit_code = main.main(
        ["extract", str(tmp_path / "snap.json"), "-o", "out.json", "--strict", "-p", "lib"]
    )

    assert exit_code == 0
    parsed = captured["args"]
    assert parsed.snapshot == str(tmp_path / "snap.json")
    assert parsed.output == "out.json"
    assert parsed.strict
    assert not parsed.modules_only
    assert parsed.package == "lib"


def test_main_requires_command(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Ensure missing subcommands make the CLI print help and fail."""

    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)

    exit_code = main.main([])

    assert exit_code == 1
    assert "Docgraph" in capsys.readouterr().out


def test_extract_writes_doc_graph(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    scenario_builder,
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    snapshot = _write_snapshot(tmp_path, scenario_builder.data)
    output = tmp_path / "graph.json"

    exit_code = main.main(["extract", str(snapshot), "-o", str(output)])

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["good_identifiers"][scenario_builder.id_of("S1")] == "/.a"
    assert "Written to" in capsys.readouterr().out


def test_extract_links_external_symbols_from_snapshot(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, scenario_builder
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    scenario_builder.symbol("S1", kind="class", name="S1", references=["React"])
    scenario_builder.symbol(
        "React",
        kind="namespace",
        external=True,
        reference={"package": "react", "version": "18.2.0", "id": "r1"},
    )
    snapshot = _write_snapshot(tmp_path, scenario_builder.data)
    output = tmp_path / "graph.json"

    exit_code = main.main(["extract", str(snapshot), "-o", str(output)])

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["external_references"] == {
        scenario_builder.id_of("React"): {
            "package": "react",
            "version": "18.2.0",
            "symbol_id": "r1",
        }
    }


def test_extract_strict_failure_returns_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, scenario_builder
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    scenario_builder.symbol("M", kind="module", name="index", exports={"x": None})
    snapshot = _write_snapshot(tmp_path, scenario_builder.data)
    output = tmp_path / "graph.json"

    exit_code = main.main(["extract", str(snapshot), "-o", str(output), "--strict"])

    assert exit_code == 1
    assert not output.exists()


def test_extract_rejects_snapshot_without_roots(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, builder
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    builder.symbol("A", kind="class")
    snapshot = _write_snapshot(tmp_path, builder.data)

    exit_code = main.main(["extract", str(snapshot), "-o", str(tmp_path / "g.json")])

    assert exit_code == 1


def test_extract_reads_config_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, scenario_builder
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    snapshot = _write_snapshot(tmp_path, scenario_builder.data)
    config = tmp_path / "docgraph.toml"
    config.write_text('[extraction]\npackage_name = "other"\n', encoding="utf-8")
    output = tmp_path / "graph.json"

    exit_code = main.main(
        ["extract", str(snapshot), "-o", str(output), "--config", str(config)]
    )

    assert exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["package_name"] == "other"
    assert data["good_identifiers"][scenario_builder.id_of("S1")] == "pkg.a"


def test_extract_missing_snapshot_returns_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)

    exit_code = main.main(["extract", str(tmp_path / "nope.json"), "-o", str(tmp_path / "g.json")])

    assert exit_code == 1
