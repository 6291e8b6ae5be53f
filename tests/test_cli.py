"""CLI tests for the anyhash command."""

import io
import json
import sys
from pathlib import Path

import pytest

from anyhash import canonical_bytes, hexdigest
from anyhash import cli


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def test_digest_single_file(tmp_path, capsys):
    data = {"name": "fred", "tags": ["a", "b"], "count": 3}
    path = _write_json(tmp_path / "doc.json", data)
    cli.main([str(path)])
    out = capsys.readouterr().out
    assert out == f"{hexdigest(data)}  {path}\n"


def test_key_order_does_not_matter(tmp_path, capsys):
    first = _write_json(tmp_path / "a.json", {"x": 1, "y": {"p": "q", "r": "s"}})
    second = tmp_path / "b.json"
    second.write_text('{"y": {"r": "s", "p": "q"}, "x": 1}', encoding="utf-8")
    cli.main([str(first), str(second)])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].split()[0] == lines[1].split()[0]


def test_algorithm_option(tmp_path, capsys):
    path = _write_json(tmp_path / "doc.json", "Hello world")
    cli.main(["--algorithm", "sha1", str(path)])
    assert capsys.readouterr().out.startswith("7b502c3a1f48c8609ae212cdfb639dee39673f5e  ")


def test_raw_stream(tmp_path, capsys):
    path = _write_json(tmp_path / "doc.json", {"Hello": "world"})
    cli.main(["--raw", str(path)])
    out = capsys.readouterr().out
    assert out.split()[0] == canonical_bytes({"Hello": "world"}).hex()


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO('["a", "b"]'))
    cli.main([])
    assert capsys.readouterr().out == f"{hexdigest(['a', 'b'])}  -\n"


def test_missing_file_fails(tmp_path, capsys):
    good = _write_json(tmp_path / "good.json", {"a": "b"})
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing.json"), str(good)])
    assert excinfo.value.code == 1
    # The readable input is still reported.
    assert str(good) in capsys.readouterr().out


def test_invalid_json_fails(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(bad)])
    assert excinfo.value.code == 1


def test_unknown_algorithm_is_usage_error(tmp_path, capsys):
    path = _write_json(tmp_path / "doc.json", {})
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--algorithm", "nope", str(path)])
    assert excinfo.value.code == 2
    assert "unknown algorithm" in capsys.readouterr().err


def test_bad_key_hash_is_usage_error(tmp_path, capsys):
    path = _write_json(tmp_path / "doc.json", {})
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--key-hash", "nope", str(path)])
    assert excinfo.value.code == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_max_depth_exceeded_fails(tmp_path):
    path = _write_json(tmp_path / "doc.json", [[["deep"]]])
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--max-depth", "2", str(path)])
    assert excinfo.value.code == 1


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("anyhash ")
