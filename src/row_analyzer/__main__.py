from __future__ import annotations
import argparse, json, sys
from pathlib import Path
from typing import List, Optional, Tuple

from . import config as CFG
from .config import AnalysisConfig
from .engine import Engine
from .errors import AnalysisError
from .models import AnalysisResult
from .reports import write_reports
from .sources import Directory, InputSource, SingleFile, discover_files, report_basename


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="row_analyzer",
        description="Character count per row: statistics, distributions and outliers",
        epilog="Examples:\n"
               "  row_analyzer large_dataset.csv ./my_reports\n"
               "  row_analyzer --directory ./csv_files ./my_reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("paths", nargs="*", metavar="PATH",
                   help="<input_file> [output_directory], or just [output_directory] with --directory")
    p.add_argument("--directory", default=None, help="Analyze every .csv file in this folder")
    p.add_argument("--page-size", type=int, default=None, help=f"Characters per page (default {CFG.PAGE_SIZE})")
    p.add_argument("--workers", type=int, default=None, help=f"Worker count (default {CFG.WORKER_THREADS})")
    p.add_argument("--mode", choices=list(CFG.MODES), default=None)
    p.add_argument("--executor", choices=list(CFG.EXECUTORS), default=None)
    p.add_argument("--json", action="store_true", help="Print a JSON summary instead of writing reports")
    p.add_argument("--verbose", action="store_true")
    return p


def resolve_source(p: argparse.ArgumentParser, args: argparse.Namespace) -> Tuple[InputSource, str]:
    out_dir = CFG.REPORT_DIR
    if args.directory:
        if len(args.paths) > 1:
            p.error("--directory accepts at most one output directory")
        if args.paths:
            out_dir = args.paths[0]
        return Directory(args.directory), out_dir

    if not args.paths:
        p.error("missing input argument: use a file path or --directory <path>")
    if len(args.paths) > 2:
        p.error("unexpected extra arguments: " + " ".join(args.paths[2:]))
    if len(args.paths) == 2:
        out_dir = args.paths[1]
    return SingleFile(args.paths[0]), out_dir


def print_success_message(basename: str, page_size: int) -> None:
    print(f"Generated six report files with prefix '{basename}_':")
    print(f"  1. {basename}_char_counts_report_*.csv\n"
          f"   - Contains file_row, data_index, and character count for each row")
    print(f"  2. {basename}_value_counts_report_*.csv\n"
          f"   - Contains frequency distribution of row lengths (sorted by length)")
    print(f"  3. {basename}_md_outliers_report_*.md\n"
          f"   - Contains descriptive statistics and potential outliers")
    print(f"  4. {basename}_txt_outliers_report_*.txt\n"
          f"   - Plain text version of outliers report with evenly spaced columns")
    print(f"  5. {basename}_pages_valuecounts_report_*.csv\n"
          f"   - Contains distribution of rows by page length ({page_size} chars per page)")
    print(f"  6. {basename}_length_sorted_report_*.csv\n"
          f"   - Contains file_row, data_index, and character count for each row (sorted by length descending)")
    print("\nIndex Explanation:")
    print("  - file_row: Physical line number in the file (1-based, starts at 1)")
    print("  - data_index: Position in the data (-1 = header row, 0 = first data row, 1 = second data row, etc.)")
    print("  When examining the original file, always use file_row to locate specific rows")
    print()


def run_file(eng: Engine, path: str, out_dir: str, as_json: bool) -> AnalysisResult:
    """Analyze one file and, unless `as_json`, write its reports. Raises AnalysisError on failure."""
    result = eng.analyze(path)
    if not as_json:
        basename = report_basename(path)
        write_reports(result, out_dir, basename)
        print_success_message(basename, result.page_size)
    return result


def print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def run_directory(eng: Engine, directory: str, out_dir: str, as_json: bool) -> int:
    """
    Analyze every matching file; a failing file is reported and skipped.

    With `as_json` the summaries of all processed files are printed as one
    JSON array once the directory is done.
    """
    processed = 0
    summaries = []
    for path in discover_files(directory):
        name = Path(path).name
        print(f"Processing CSV file: {name}", file=sys.stderr if as_json else sys.stdout)
        try:
            result = run_file(eng, path, out_dir, as_json)
        except AnalysisError as e:
            print(f"Error analyzing CSV file {name}: {e}", file=sys.stderr)
            continue
        if as_json:
            summaries.append(result.to_dict())
        processed += 1
    if as_json:
        print_json(summaries)
    return processed


def main(argv: Optional[List[str]] = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)
    source, out_dir = resolve_source(p, args)

    try:
        cfg = AnalysisConfig().with_overrides(
            page_size=args.page_size, worker_count=args.workers,
            mode=args.mode, executor=args.executor,
        )
    except AnalysisError as e:
        p.error(str(e))

    eng = Engine(cfg, verbose=args.verbose)
    info = sys.stderr if args.json else sys.stdout
    try:
        if isinstance(source, SingleFile):
            print(f"Analyzing CSV file: {Path(source.path).name} ({source.path})", file=info)
            if not args.json:
                print(f"Reports will be saved to: {out_dir}")
            try:
                result = run_file(eng, source.path, out_dir, args.json)
            except AnalysisError as e:
                print(f"Error analyzing CSV file: {e}", file=sys.stderr)
                return 1
            if args.json:
                print_json(result.to_dict())
        else:
            print(f"Analyzing all CSV files in directory: {source.path}", file=info)
            if not args.json:
                print(f"Reports will be saved to: {out_dir}")
            try:
                count = run_directory(eng, source.path, out_dir, args.json)
            except OSError as e:
                print(f"Error processing directory: {e}", file=sys.stderr)
                return 1
            print(f"Successfully processed {count} CSV files from directory", file=info)
        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
