import logging

import pytest

import geolisp.__main__ as cli

RIGHT_TRIANGLE = """
(setq A (point 0 0))
(setq B (point 0 3))
(setq C (point 4 0))
(triangle A B C)
"""


@pytest.fixture
def program_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "scene.gl"
    path.write_text(RIGHT_TRIANGLE, encoding="utf-8")
    return path


def test_main_writes_default_svg(program_path, tmp_path, capsys):
    assert cli.main([str(program_path)]) == 0

    written = (tmp_path / "output.svg").read_text(encoding="utf-8")
    assert written.startswith("<svg ")
    assert written.count("<line ") == 3
    assert capsys.readouterr().out == written


def test_main_labels(program_path, tmp_path):
    assert cli.main([str(program_path), "--label", "--point-markers"]) == 0
    written = (tmp_path / "output.svg").read_text(encoding="utf-8")
    assert ">A</text>" in written
    assert "<circle " not in written


def test_main_tikz_output_path(program_path, tmp_path):
    out = tmp_path / "out" / "diagram.tex"
    assert cli.main([str(program_path), "--format", "tikz", "--output", str(out)]) == 0

    document = out.read_text(encoding="utf-8")
    assert document.startswith("\\documentclass")
    assert "\\draw[carrier] (0, 0) -- (0, 3);" in document
    assert not (tmp_path / "output.svg").exists()


def test_main_default_tikz_name(program_path, tmp_path):
    assert cli.main([str(program_path), "--format", "tikz"]) == 0
    assert (tmp_path / "output.tex").exists()


def test_main_reports_errors_without_output(tmp_path, monkeypatch, caplog, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "broken.gl"
    path.write_text("(circle)\n(midpoint A (point 0 0))\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        assert cli.main([str(path)]) == 1

    assert not (tmp_path / "output.svg").exists()
    assert capsys.readouterr().out == ""
    message = caplog.records[-1].getMessage()
    assert message.startswith("UnboundVariableError: [line 2, col 11]")
    assert "(midpoint A (point 0 0))" in message


def test_main_seed_makes_output_reproducible(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "random.gl"
    path.write_text("(setq K (circle))\nK\n(triangle K)\n", encoding="utf-8")

    cli.main([str(path), "--seed", "5", "--output", "first.svg"])
    cli.main([str(path), "--seed", "5", "--output", "second.svg"])
    assert (tmp_path / "first.svg").read_text() == (tmp_path / "second.svg").read_text()


def test_main_preview_png(program_path, tmp_path):
    pytest.importorskip("matplotlib")
    png = tmp_path / "preview.png"
    assert cli.main([str(program_path), "--preview-png", str(png)]) == 0
    assert png.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_main_reports_missing_file(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.ERROR):
        assert cli.main([str(tmp_path / "missing.gl")]) == 1
    assert "Cannot read program" in caplog.records[-1].getMessage()
    assert not (tmp_path / "output.svg").exists()


def test_main_reports_undecodable_file(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "latin1.gl"
    path.write_bytes(b"(point 0 0) ; caf\xe9\n")
    with caplog.at_level(logging.ERROR):
        assert cli.main([str(path)]) == 1
    assert "Cannot read program" in caplog.records[-1].getMessage()


def test_main_reports_out_of_range_literal(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "huge.gl"
    path.write_text("(point 1" + "0" * 400 + " 0)\n", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert cli.main([str(path)]) == 1
    assert caplog.records[-1].getMessage().startswith("LexError: [line 1, col 8]")
