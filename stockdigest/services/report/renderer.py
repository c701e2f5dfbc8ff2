"""리포트 HTML 렌더러

카테고리마다 컨테이너 하나(div.mb-6), 종목마다 목록 항목 하나(li)를 만듭니다.
화면 레이어는 이 마크업을 그대로 출력합니다.
"""

from html import escape
from typing import Iterable

from stockdigest.schemas.report import CategoryBlock, HeadingBlock, Report, Section

SUMMARY_TITLE = "상승률 TOP 30 정리"
FONT_SIZE_PT = 14


def count_badge(count: int) -> str:
    return f"{count}개" if count > 0 else ""


def render_category(block: CategoryBlock) -> str:
    badge = count_badge(block.count)
    badge_html = (
        f'<span class="text-sm font-bold text-white bg-slate-500 px-2 py-0.5 rounded-full '
        f'shadow-md whitespace-nowrap flex-shrink-0">{badge}</span>'
        if badge else ""
    )
    parts = [
        '<div class="mb-6">',
        '<h3 class="text-lg font-bold text-blue-700 mb-2 flex items-center gap-2">'
        f'<span class="text-2xl mr-1">{block.emoji}</span> {escape(block.label)} {badge_html}</h3>',
        f'<ul class="space-y-1 ml-1" style="font-size: {FONT_SIZE_PT}pt; line-height: 1.6;">',
    ]
    for stock in block.stocks:
        parts.append(
            '<li class="flex items-start text-slate-700">'
            '<span class="mr-2 text-blue-300" style="font-size: 0.8em; margin-top: 0.3em;">•</span>'
            '<span>'
            f'<strong class="font-semibold text-slate-800">{escape(stock.name)}</strong>'
            '<span style="font-size: 0.85em; opacity: 0.8;" class="ml-1 text-slate-600">'
            f'(상승률 <span class="text-red-500 font-medium">{escape(stock.rate)}</span>, '
            f'시총 {escape(stock.market_cap_text)})</span>'
            '</span>'
            '</li>'
        )
    parts.append('</ul></div>')
    return "".join(parts)


def render_heading(block: HeadingBlock) -> str:
    return f'<div class="mb-4"><h3 class="text-lg font-bold text-slate-600 mb-1">{escape(block.label)}</h3></div>'


def render_sections(sections: Iterable[Section]) -> str:
    html = [
        f'<h2 class="text-xl sm:text-2xl font-bold text-slate-800 mb-4 border-b pb-2">{SUMMARY_TITLE}</h2>'
    ]
    for section in sections:
        if isinstance(section, CategoryBlock):
            html.append(render_category(section))
        else:
            html.append(render_heading(section))
    return "".join(html)


def render_report(report: Report) -> str:
    return render_sections(report.sections)
