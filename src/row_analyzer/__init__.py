"""
Row Length Analyzer

Measures the character length of every line of a line-oriented text file
(typically a CSV export) and derives descriptive statistics, frequency
tables by exact length and by page bucket, and 1.5 x IQR outliers.

The module is designed with a clean separation of concerns:
- Ingestion with stable row identity (loader)
- Parallel counting with order-restoring aggregation (parallel, aggregate)
- Statistics, distributions and outlier detection (stats, distribution, outliers)
- Report rendering (reports), kept outside the engine

Main Functions:
    analyze(source, config): run one analysis and return an AnalysisResult
    write_reports(result, out_dir, basename): write the six report files

Example Usage:
    from row_analyzer import analyze, AnalysisConfig

    result = analyze("data/large_file.csv", AnalysisConfig(worker_count=4))
    print(result.statistics.median, result.outliers.lengths)
"""

# src/row_analyzer/__init__.py
from .config import AnalysisConfig
from .engine import Engine, analyze
from .errors import AnalysisError
from .models import AnalysisResult, RowRecord, StatisticsSummary
from .reports import write_reports

__version__ = "1.0.0"
__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisResult",
    "Engine",
    "RowRecord",
    "StatisticsSummary",
    "analyze",
    "write_reports",
]
