import io
import json
from pathlib import Path

import pandas as pd

from jsonscan_lib.cli import main


def test_cli_writes_jsonl_file(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('[{"a": 1}, {"a": {"b": "}"}}]', encoding="utf-8")
    out = tmp_path / "out.jsonl"
    assert main([str(src), "-o", str(out), "--chunk-size", "2", "--stats"]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [json.loads(ln) for ln in lines] == [{"a": 1}, {"a": {"b": "}"}}]


def test_cli_reads_stdin_and_writes_stdout(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('data: {"x": 1}\n{"x": 2}\n'))
    assert main(["-", "--prefix", "data:"]) == 0
    out = capsys.readouterr().out
    assert [json.loads(ln) for ln in out.splitlines()] == [{"x": 1}, {"x": 2}]


def test_cli_csv_output(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"id": 1, "m": {"t": "a"}}{"id": 2, "m": {"t": "b"}}', encoding="utf-8")
    out = tmp_path / "out.csv"
    assert main([str(src), "--format", "csv", "-o", str(out)]) == 0
    df = pd.read_csv(out)
    assert df["m.t"].tolist() == ["a", "b"]


def test_cli_csv_requires_output(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text("{}", encoding="utf-8")
    assert main([str(src), "--format", "csv"]) == 1


def test_cli_prefix_from_config(tmp_path: Path):
    cfg = tmp_path / "c.yaml"
    cfg.write_text("decoder:\n  prefix: '>>'\nreader:\n  chunk_size: 3\n", encoding="utf-8")
    src = tmp_path / "in.txt"
    src.write_text('{"skipped": 1} >> {"kept": 1}', encoding="utf-8")
    out = tmp_path / "out.jsonl"
    assert main([str(src), "--config", str(cfg), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8").splitlines() == ['{"kept": 1}']


def test_cli_malformed_exit_code(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"a": 1}{a: 2}{"a": 3}', encoding="utf-8")
    out = tmp_path / "out.jsonl"
    assert main([str(src), "-o", str(out)]) == 2


def test_cli_missing_input(tmp_path: Path):
    assert main([str(tmp_path / "nope.json")]) == 1


def test_cli_missing_config(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text("{}", encoding="utf-8")
    assert main([str(src), "--config", str(tmp_path / "nope.yaml")]) == 1


def test_cli_keeps_objects_before_malformed_one(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"a": 1}{a: 2}{"a": 3}', encoding="utf-8")
    out = tmp_path / "out.jsonl"
    assert main([str(src), "-o", str(out)]) == 2
    assert out.read_text(encoding="utf-8").splitlines() == ['{"a": 1}']


def test_cli_csv_keeps_objects_before_malformed_one(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"id": 1}{"id": 2}{id: 3}', encoding="utf-8")
    out = tmp_path / "out.csv"
    assert main([str(src), "--format", "csv", "-o", str(out)]) == 2
    assert pd.read_csv(out)["id"].tolist() == [1, 2]


def test_cli_invalid_utf8_input(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_bytes(b'{"a": "\xff"}')
    assert main([str(src), "-o", str(tmp_path / "out.jsonl")]) == 1


def test_cli_unwritable_output(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text('{"a": 1}', encoding="utf-8")
    assert main([str(src), "-o", str(tmp_path / "missing" / "out.jsonl")]) == 1


def test_cli_non_string_prefix_in_config(tmp_path: Path):
    cfg = tmp_path / "c.yaml"
    cfg.write_text("decoder:\n  prefix: 5\nreader:\n  chunk_size: 4\n", encoding="utf-8")
    src = tmp_path / "in.txt"
    src.write_text('{"skip": 1} 5 {"kept": 2}', encoding="utf-8")
    out = tmp_path / "out.jsonl"
    assert main([str(src), "--config", str(cfg), "-o", str(out)]) == 0
    assert out.read_text(encoding="utf-8").splitlines() == ['{"kept": 2}']


def test_cli_zero_chunk_size_rejected(tmp_path: Path):
    src = tmp_path / "in.json"
    src.write_text("{}", encoding="utf-8")
    assert main([str(src), "--chunk-size", "0"]) == 1
