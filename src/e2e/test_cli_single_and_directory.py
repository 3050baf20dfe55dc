import json
from pathlib import Path

import pytest

from row_analyzer.__main__ import main
from row_analyzer.engine import Engine
from row_analyzer.errors import AnalysisError


def _seed(tmp: Path) -> Path:
    src = tmp / "in"; src.mkdir()
    (src / "good.csv").write_text("name,value\nalpha,1\nbeta,22\n", encoding="utf-8")
    (src / "bad.csv").write_text("h\nx\n", encoding="utf-8")
    (src / "notes.txt").write_text("ignored\n", encoding="utf-8")
    return src


@pytest.mark.e2e
def test_single_file_writes_reports(tmp_path: Path, capsys):
    src = _seed(tmp_path)
    out = tmp_path / "out"
    assert main([str(src / "good.csv"), str(out), "--workers", "2"]) == 0
    names = sorted(p.name for p in out.iterdir())
    assert len(names) == 6
    assert all(n.startswith("good_") for n in names)
    assert "Generated six report files with prefix 'good_'" in capsys.readouterr().out


@pytest.mark.e2e
def test_missing_file_exits_non_zero(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing.csv"), str(tmp_path / "out")]) == 1
    assert "Error analyzing CSV file" in capsys.readouterr().err


@pytest.mark.e2e
def test_directory_mode_continues_after_a_failure(tmp_path: Path, monkeypatch, capsys):
    src = _seed(tmp_path)
    out = tmp_path / "out"
    real = Engine.analyze

    def fake(self, source):
        if str(source).endswith("bad.csv"):
            raise AnalysisError("simulated failure")
        return real(self, source)

    monkeypatch.setattr(Engine, "analyze", fake)
    assert main(["--directory", str(src), str(out), "--mode", "streaming"]) == 0

    captured = capsys.readouterr()
    assert "Error analyzing CSV file bad.csv: simulated failure" in captured.err
    assert "Successfully processed 1 CSV files from directory" in captured.out
    assert {p.name.split("_")[0] for p in out.iterdir()} == {"good"}


@pytest.mark.e2e
def test_json_summary_goes_to_stdout(tmp_path: Path, capsys):
    src = _seed(tmp_path)
    assert main([str(src / "good.csv"), "--json", "--page-size", "5"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["total_rows"] == 3
    assert data["page_size"] == 5
    assert data["statistics"]["median"] == 7
    assert [b["page_length"] for b in data["page_counts"]] == [2]


def test_argument_errors_exit_with_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
    with pytest.raises(SystemExit):
        main(["a.csv", "--workers", "0"])


@pytest.mark.e2e
def test_directory_json_is_one_document(tmp_path: Path, capsys):
    src = _seed(tmp_path)
    assert main(["--directory", str(src), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert isinstance(data, list)
    assert [d["source"].rsplit("/", 1)[-1] for d in data] == ["bad.csv", "good.csv"]
    assert [d["total_rows"] for d in data] == [2, 3]
