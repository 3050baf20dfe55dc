from pathlib import Path

import pytest

from row_analyzer.config import AnalysisConfig
from row_analyzer.engine import Engine, analyze

LINES = [
    "id,name,comment",
    "1,alice,short",
    "2,bob,",
    "3,carol," + "long text " * 40,
    "4,dave,ok",
    "",
    "5,ève,naïve café",
    "6,frank," + "z" * 3001,
    "7,grace,ok",
]


def _seed(tmp: Path) -> Path:
    p = tmp / "people.csv"
    p.write_text("\n".join(LINES) + "\n", encoding="utf-8")
    return p


@pytest.mark.e2e
@pytest.mark.parametrize("workers", [1, 2, 3, 8, 50])
def test_parallel_matches_streaming(tmp_path: Path, workers: int):
    path = _seed(tmp_path)
    streamed = analyze(path, AnalysisConfig(mode="streaming"))
    eng = Engine(AnalysisConfig(worker_count=workers))
    try:
        par = eng.analyze(str(path))
    finally:
        eng.shutdown()

    assert par.corpus == streamed.corpus
    assert par.statistics == streamed.statistics
    assert par.length_table == streamed.length_table
    assert par.page_table == streamed.page_table
    assert par.total_chars == streamed.total_chars
    assert par.outliers.lengths == streamed.outliers.lengths


@pytest.mark.e2e
def test_counts_characters_not_bytes(tmp_path: Path):
    path = _seed(tmp_path)
    result = analyze(path)
    assert [r.char_count for r in result.corpus] == [len(line) for line in LINES]
    assert result.corpus[6].char_count == 16     # 19 bytes in UTF-8
    assert result.total_rows == len(LINES)
    assert result.total_chars == sum(len(line) for line in LINES)
    assert result.error_count == 0


@pytest.mark.e2e
def test_crlf_terminators_are_not_counted(tmp_path: Path):
    p = tmp_path / "win.csv"
    p.write_bytes(b"ab\r\ncd\r\nlast")
    result = analyze(p)
    assert [r.char_count for r in result.corpus] == [2, 2, 4]


@pytest.mark.e2e
def test_engine_reuses_pool_across_files(tmp_path: Path):
    a = tmp_path / "a.csv"; a.write_text("h\n1\n22\n", encoding="utf-8")
    b = tmp_path / "b.csv"; b.write_text("h\n333\n", encoding="utf-8")
    eng = Engine(AnalysisConfig(worker_count=2))
    try:
        ra = eng.analyze(a)
        rb = eng.analyze(b)
    finally:
        eng.shutdown()
    assert ra.total_rows == 3 and rb.total_rows == 2
    assert rb.corpus[1].data_index == 0


@pytest.mark.e2e
def test_open_stream_source(tmp_path: Path):
    path = _seed(tmp_path)
    with open(path, "rb") as f:
        result = analyze(f)
    assert result.source == str(path)
    assert result.total_rows == len(LINES)


@pytest.mark.e2e
@pytest.mark.parametrize("executor", ["threads", "procs"])
def test_executor_kinds_agree(tmp_path: Path, executor: str):
    path = _seed(tmp_path)
    streamed = analyze(path, AnalysisConfig(mode="streaming"))
    eng = Engine(AnalysisConfig(executor=executor, worker_count=2))
    try:
        par = eng.analyze(path)
    finally:
        eng.shutdown()
    assert par.corpus == streamed.corpus
    assert par.statistics == streamed.statistics


@pytest.mark.e2e
def test_concurrent_first_use_builds_one_pool(tmp_path: Path, monkeypatch):
    import threading
    from concurrent.futures import ThreadPoolExecutor

    import row_analyzer.engine as engmod

    built = []
    gate = threading.Barrier(4)

    def counting_make(mode, workers):
        built.append(mode)
        return ThreadPoolExecutor(max_workers=workers)

    monkeypatch.setattr(engmod, "make_executor", counting_make)
    eng = Engine(AnalysisConfig(worker_count=2))
    seen = []

    def first_use():
        gate.wait()
        seen.append(eng._pool())

    threads = [threading.Thread(target=first_use) for _ in range(4)]
    try:
        for t in threads:
            t.start()
        for t in threads:
            t.join()
    finally:
        eng.shutdown()
    assert len(built) == 1
    assert len({id(p) for p in seen}) == 1
