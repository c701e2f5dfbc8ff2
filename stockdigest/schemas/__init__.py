from stockdigest.schemas.report import (
    CategoryBlock,
    CompiledReport,
    HeadingBlock,
    MergedGroup,
    RawMessage,
    Report,
    ReportSource,
    RunResult,
    StockDetail,
    StockEntry,
)

__all__ = [
    "CategoryBlock",
    "CompiledReport",
    "HeadingBlock",
    "MergedGroup",
    "RawMessage",
    "Report",
    "ReportSource",
    "RunResult",
    "StockDetail",
    "StockEntry",
]
