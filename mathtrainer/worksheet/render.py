from __future__ import annotations

"""A4 PDF worksheet rendering with matplotlib.

Positions are computed in millimetres from the top-left corner and converted
to figure fractions.
"""

import os
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")

from matplotlib.backends.backend_pdf import PdfPages  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.lines import Line2D  # noqa: E402

from ..arithmetic import describe_difficulty, describe_operation  # noqa: E402
from ..drills.generator import ProblemGenerator  # noqa: E402
from ..results.schema import Problem  # noqa: E402
from .layout import LayoutConfig  # noqa: E402

PAGE_W_MM = 210.0
PAGE_H_MM = 297.0
MM_PER_INCH = 25.4
MM_PER_PT = 0.3528
FIRST_ROW_MM = 70.0
CONTINUATION_TOP_MM = 30.0
ANSWERS_PER_ROW = 5
ANSWER_ROW_MM = 12.0


def build_worksheet(layout: LayoutConfig, generator: Optional[ProblemGenerator] = None) -> List[Problem]:
    """Generate the ordered problem list a layout asks for."""
    gen = generator or ProblemGenerator()
    return gen.generate_mixed(layout.difficulty, layout.problem_count, layout.operations)


class _Page:
    def __init__(self) -> None:
        self.fig = Figure(figsize=(PAGE_W_MM / MM_PER_INCH, PAGE_H_MM / MM_PER_INCH))

    def text(self, x_mm: float, y_mm: float, s: str, size: float, **kw) -> None:
        self.fig.text(x_mm / PAGE_W_MM, 1 - y_mm / PAGE_H_MM, s, fontsize=size, va="baseline", **kw)

    def line(self, x0: float, y0: float, x1: float, y1: float, width: float = 0.5) -> None:
        self.fig.add_artist(
            Line2D(
                [x0 / PAGE_W_MM, x1 / PAGE_W_MM],
                [1 - y0 / PAGE_H_MM, 1 - y1 / PAGE_H_MM],
                transform=self.fig.transFigure,
                linewidth=width,
                color="black",
            )
        )


def _text_width_mm(s: str, font_size: float) -> float:
    # rough average glyph width of half an em
    return len(s) * font_size * MM_PER_PT * 0.5


def _header(page: _Page, layout: LayoutConfig) -> None:
    page.text(PAGE_W_MM / 2, 25, layout.title, 20, ha="center", weight="bold")
    left = layout.margin_mm
    right = PAGE_W_MM - layout.margin_mm - 50
    y = 40.0
    if layout.student_name:
        page.text(left, y, "Name: " + "_" * 20, 12)
    if layout.class_name:
        page.text(right, y, f"Class: {layout.class_name}", 12)
    y += 8
    if layout.date:
        page.text(left, y, f"Date: {layout.date}", 12)
    page.text(right, y, f"Level: {describe_difficulty(layout.difficulty)}", 12)
    y += 8
    ops = ", ".join(describe_operation(op) for op in layout.operations)
    page.text(left, y, f"Operations: {ops}", 12)
    page.text(right, y, f"Problems: {layout.problem_count}", 12)
    y += 10
    page.line(left, y, PAGE_W_MM - layout.margin_mm, y)


def render_worksheet(problems: List[Problem], layout: LayoutConfig, path: str | os.PathLike[str]) -> int:
    """Write the worksheet PDF and return its page count."""
    pages: List[_Page] = [_Page()]
    _header(pages[0], layout)

    per_row = layout.problems_per_row
    col_w = (PAGE_W_MM - 2 * layout.margin_mm) / per_row
    spacing = layout.font_size + 15
    y = FIRST_ROW_MM
    for i, p in enumerate(problems):
        if y > PAGE_H_MM - 40:
            pages.append(_Page())
            y = CONTINUATION_TOP_MM
        x = layout.margin_mm + (i % per_row) * col_w
        label = f"{i + 1}. {p.operand1} {p.operator_symbol} {p.operand2} = "
        pages[-1].text(x, y, label, layout.font_size)
        answer_x = x + _text_width_mm(label, layout.font_size)
        if layout.show_answers:
            pages[-1].text(answer_x, y, str(p.correct_answer), layout.font_size)
        else:
            underline = max(20.0, len(str(p.correct_answer)) * 8.0)
            pages[-1].line(answer_x, y + 2, min(answer_x + underline, x + col_w - 2), y + 2)
        if (i + 1) % per_row == 0:
            y += spacing

    if layout.include_answer_sheet and not layout.show_answers and problems:
        sheet = _Page()
        pages.append(sheet)
        sheet.text(PAGE_W_MM / 2, 25, "Answer Key", 18, ha="center", weight="bold")
        ans_w = (PAGE_W_MM - 2 * layout.margin_mm) / ANSWERS_PER_ROW
        y = 40.0
        for i, p in enumerate(problems):
            if y > 270:
                pages.append(_Page())
                y = CONTINUATION_TOP_MM
            x = layout.margin_mm + (i % ANSWERS_PER_ROW) * ans_w
            pages[-1].text(x, y, f"{i + 1}. {p.correct_answer}", 12)
            if (i + 1) % ANSWERS_PER_ROW == 0:
                y += ANSWER_ROW_MM

    with PdfPages(path) as pdf:
        for page in pages:
            pdf.savefig(page.fig)
    return len(pages)
