from stockdigest.services.report.compiler import DigestCompiler, ReportStore
from stockdigest.services.report.market_cap import filter_by_market_cap, parse_market_cap
from stockdigest.services.report.renderer import render_report

__all__ = [
    "DigestCompiler",
    "ReportStore",
    "filter_by_market_cap",
    "parse_market_cap",
    "render_report",
]
