"""Tests for the marginalia command line."""

import json

import pytest

from marginalia.cli import graph

RECORDS = {
    "records": [
        {"source": {"id": "A"}, "target": {"id": "B"}, "label": "KNOWS"},
        {"source": {"id": "A"}, "target": {"id": "B"}, "label": "KNOWS"},
        {"source": {"id": "A"}, "target": None, "label": "X"},
    ]
}


def test_graph_from_records_file(tmp_path):
    records = tmp_path / "records.json"
    records.write_text(json.dumps(RECORDS))
    output = tmp_path / "out" / "graph.json"

    assert graph(records=records, output=output, config=tmp_path / "none.json") == 0

    data = json.loads(output.read_text())
    assert [node["id"] for node in data["nodes"]] == ["A", "B"]
    assert len(data["links"]) == 2


def test_graph_to_stdout(tmp_path, capsys):
    records = tmp_path / "records.json"
    records.write_text(json.dumps(RECORDS))

    assert graph(records=records, config=tmp_path / "none.json") == 0

    data = json.loads(capsys.readouterr().out)
    assert data["links"][0] == {"source": "A", "target": "B", "label": "KNOWS"}


def test_unreadable_records_give_empty_graph(tmp_path, capsys):
    assert graph(records=tmp_path / "missing.json", config=tmp_path / "none.json") == 0

    data = json.loads(capsys.readouterr().out)
    assert data == {"nodes": [], "links": []}


def test_invalid_config(tmp_path):
    config = tmp_path / "config.json"
    config.write_text("{broken")

    with pytest.raises(SystemExit) as exc_info:
        graph(records=tmp_path / "records.json", config=config)

    assert exc_info.value.code == 1
