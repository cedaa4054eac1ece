from .config import AnalyticsConfig
from .metrics import operation_breakdown
from .prepare import export_ndjson, export_parquet, problems_frame, sessions_frame
from .report import LearningReport, build_report, format_report
from .smoothing import ewma_by_session
from .plots import plot_accuracy_trend, plot_strengths

__all__ = [
    "AnalyticsConfig",
    "operation_breakdown",
    "export_ndjson",
    "export_parquet",
    "problems_frame",
    "sessions_frame",
    "LearningReport",
    "build_report",
    "format_report",
    "ewma_by_session",
    "plot_accuracy_trend",
    "plot_strengths",
]
