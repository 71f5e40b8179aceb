"""Tests for the jatsgraph-convert command line."""

import json
import logging

from jatsgraph.cli import main

from conftest import article_xml


def test_writes_json_to_file(tmp_path):
    source = tmp_path / "article.xml"
    source.write_text(article_xml(body="<p>Hello <bold>world</bold>.</p>"), encoding="utf-8")
    output = tmp_path / "article.json"

    assert main([str(source), "-o", str(output)]) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["id"] == "42"
    assert data["views"]["content"] == ["cover", "paragraph_1"]
    assert data["nodes"]["paragraph_1"]["content"] == "Hello world."
    assert data["annotations"][0]["range"] == [6, 11]


def test_writes_json_to_stdout(tmp_path, capsys):
    source = tmp_path / "article.xml"
    source.write_text(article_xml(body="<p>x</p>"), encoding="utf-8")
    assert main([str(source)]) == 0
    assert json.loads(capsys.readouterr().out)["nodes"]["document"]["title"] == "T"


def test_gaps_go_to_stderr(tmp_path, capsys):
    source = tmp_path / "article.xml"
    source.write_text(article_xml(body="<def-list/>"), encoding="utf-8")
    assert main([str(source), "-o", str(tmp_path / "out.json")]) == 0
    assert "skipped: unsupported_element: <def-list>" in capsys.readouterr().err


def test_strict_flag_fails(tmp_path, capsys):
    source = tmp_path / "article.xml"
    source.write_text(article_xml(body="<def-list/>"), encoding="utf-8")
    assert main([str(source), "--strict"]) == 1
    assert "error:" in capsys.readouterr().err


def test_missing_front_fails(tmp_path, capsys):
    source = tmp_path / "article.xml"
    source.write_text("<article><body/></article>", encoding="utf-8")
    assert main([str(source)]) == 1
    assert "'front'" in capsys.readouterr().err


def test_unreadable_input(tmp_path):
    assert main([str(tmp_path / "missing.xml")]) == 2


def test_each_gap_is_reported_once(tmp_path, capsys, caplog):
    source = tmp_path / "article.xml"
    source.write_text(article_xml(body="<def-list/>"), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert main([str(source), "-o", str(tmp_path / "out.json")]) == 0
    assert capsys.readouterr().err.count("def-list") == 1
    assert not [r for r in caplog.records if "def-list" in r.getMessage()]
