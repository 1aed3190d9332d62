"""Tests for reading documents, writing output and the command line."""

import json

import pytest

import mindnode_tools
from mindnode_tools import DocumentFormatError, Point, RawDocument
from mindnode_tools.cli import main
from mindnode_tools.reader import find_documents
from mindnode_tools.writer import document_to_dict, output_path


def _write_map(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_from_dict(sample_map):
    doc = RawDocument.from_dict(sample_map)

    assert doc.title == "Physics"
    assert doc.node_count == 6
    assert repr(doc) == "RawDocument('Physics', 6 nodes)"

    physics = doc.nodes[0]
    assert physics.max_width == 200
    assert physics.border_color == "#ff0000"
    assert physics.note.startswith("<p>Start here")
    assert doc.nodes[1].note is None
    assert doc.connections[1].title is None


def test_point_from_string():
    assert Point.from_value("{30, 40}") == Point(30, 40)
    assert Point.from_value("{-1.5, 2e1}") == Point(-1.5, 20)


def test_point_invalid():
    with pytest.raises(DocumentFormatError):
        Point.from_value("30, 40")
    with pytest.raises(DocumentFormatError):
        Point.from_value({"x": 1})


def test_from_dict_missing_keys(sample_map):
    del sample_map["nodes"][0]["nodes"][0]["location"]
    with pytest.raises(DocumentFormatError, match="location"):
        RawDocument.from_dict(sample_map)


def test_from_dict_defaults():
    doc = RawDocument.from_dict({"title": "Empty"})
    assert doc.nodes == []
    assert doc.connections == []


def test_read(tmp_path, sample_map):
    path = _write_map(tmp_path / "physics.json", sample_map)
    doc = mindnode_tools.read(path)
    assert [n.id for n in doc.walk()] == [1, 11, 111, 12, 2, 21]


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        mindnode_tools.read(tmp_path / "nope.json")


def test_find_documents(tmp_path, sample_map):
    _write_map(tmp_path / "b" / "two.json", sample_map)
    _write_map(tmp_path / "a.json", sample_map)
    (tmp_path / "notes.txt").write_text("skip", encoding="utf-8")

    found = [p.relative_to(tmp_path).as_posix() for p in find_documents(tmp_path)]
    assert found == ["a.json", "b/two.json"]


def test_output_path(tmp_path):
    source = tmp_path / "in" / "sub" / "x.json"
    assert output_path(source, tmp_path / "in", tmp_path / "out") == tmp_path / "out" / "sub" / "x.json"


def test_write_creates_directories(tmp_path, sample_document):
    archive = mindnode_tools.convert_archive(sample_document)
    path = mindnode_tools.write(archive, tmp_path / "deep" / "out.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == archive.to_dict()


def test_document_to_dict_roundtrip(sample_map):
    doc = RawDocument.from_dict(sample_map)
    again = RawDocument.from_dict(document_to_dict(doc))

    assert [n.id for n in again.walk()] == [n.id for n in doc.walk()]
    assert again.nodes[0].border_color == "#ff0000"
    assert again.connections[0].title == "<p>related</p>"


def test_cli_archive_directory(tmp_path, sample_map):
    _write_map(tmp_path / "in" / "science" / "physics.json", sample_map)

    assert main(["-q", "archive", str(tmp_path / "in"), str(tmp_path / "out")]) == 0

    data = json.loads((tmp_path / "out" / "science" / "physics.json").read_text(encoding="utf-8"))
    assert data["title"] == "Physics"
    assert len(data["subnodes"]) == 4


def test_cli_graph_seeded(tmp_path, sample_map):
    source = _write_map(tmp_path / "physics.json", sample_map)

    main(["-q", "graph", str(source), str(tmp_path / "g1.json"), "--seed", "5"])
    main(["-q", "graph", str(source), str(tmp_path / "g2.json"), "--seed", "5"])

    first = (tmp_path / "g1.json").read_text(encoding="utf-8")
    assert first == (tmp_path / "g2.json").read_text(encoding="utf-8")
    assert len(json.loads(first)["nodes"]) == 6


def test_cli_reports_bad_documents(tmp_path, sample_map):
    sample_map["connections"][0]["endNodeID"] = 404
    _write_map(tmp_path / "in" / "bad.json", sample_map)
    (tmp_path / "in" / "broken.json").write_text("{not json", encoding="utf-8")

    assert main(["-q", "archive", str(tmp_path / "in"), str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_cli_ids(tmp_path, sample_map):
    source = _write_map(tmp_path / "physics.json", sample_map)
    out = tmp_path / "ids.json"

    assert main(["-q", "ids", str(source), "-o", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["nodes"][1]["id"] == "Chemistry"
    assert data["connections"][0]["endNodeID"] == "Chemistry"


def test_cli_info(tmp_path, sample_map, capsys):
    source = _write_map(tmp_path / "physics.json", sample_map)

    assert main(["-q", "info", str(source)]) == 0

    out = capsys.readouterr().out
    assert "Nodes: 6 (2 top-level)" in out
    assert "• Physics [article]" in out


def _deep_map(depth):
    root = {"id": 0, "title": {"text": "<p>n0</p>"}, "location": {"x": 0, "y": 0}, "nodes": []}
    node = root
    for i in range(1, depth):
        child = {"id": i, "title": {"text": f"<p>n{i}</p>"}, "location": {"x": i, "y": i}, "nodes": []}
        node["nodes"].append(child)
        node = child
    return {"title": "Deep", "nodes": [root], "connections": []}


def test_from_dict_deep_document():
    doc = RawDocument.from_dict(_deep_map(3000))

    assert doc.node_count == 3000
    entries = mindnode_tools.flatten(doc.nodes, lambda node: node.id)
    assert entries[-1].node.location == Point(2999, 2999)
    assert entries[-1].parent == 2998


def test_document_to_dict_deep_document():
    data = document_to_dict(RawDocument.from_dict(_deep_map(3000)))

    node = data["nodes"][0]
    depth = 1
    while node["nodes"]:
        node = node["nodes"][0]
        depth += 1
    assert depth == 3000
    assert node["id"] == 2999


def test_from_dict_keeps_child_order(sample_map):
    doc = RawDocument.from_dict(sample_map)
    assert [child.id for child in doc.nodes[0].children] == [11, 12]


def test_cli_ids_reports_duplicates(tmp_path, sample_map, caplog):
    sample_map["nodes"][1]["title"]["text"] = "<p>Mechanics</p>"
    source = _write_map(tmp_path / "physics.json", sample_map)
    out = tmp_path / "ids.json"

    assert main(["-q", "ids", str(source), "-o", str(out)]) == 1
    assert not out.exists()
    assert "Mechanics" in caplog.text


def test_cli_info_reports_dangling_connection(tmp_path, sample_map, caplog, capsys):
    sample_map["connections"][0]["endNodeID"] = 404
    source = _write_map(tmp_path / "physics.json", sample_map)

    assert main(["-q", "info", str(source)]) == 1
    assert "404" in caplog.text
    assert capsys.readouterr().out == ""


def test_cli_info_missing_file(tmp_path):
    assert main(["-q", "info", str(tmp_path / "nope.json")]) == 1
