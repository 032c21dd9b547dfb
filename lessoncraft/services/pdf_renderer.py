"""
Lesson plan PDF renderer.

Linearizes a LessonPlan onto A4 pages with a top-down vertical cursor
(millimetres from the top edge). Fixed-size lines (titles, labels, bullets)
advance the cursor by a constant line height; free-text blocks are wrapped to
a fixed column and break onto a new page once the cursor passes the lower
threshold. Every drawn line is also recorded in `RenderedDocument.lines` so
the layout can be inspected without parsing the PDF.
"""

import base64
import re
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from lessoncraft.models.lesson_plan import LessonPlan, ListField, OutlineSection

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

DEFAULT_FILENAME = "lesson_plan"

LIST_SECTIONS = (
    (ListField.SUB_TOPICS, "Sub-topics:"),
    (ListField.MATERIALS, "Materials Needed:"),
    (ListField.OBJECTIVES, "Learning Objectives:"),
)


@dataclass(frozen=True)
class PageLayout:
    left_margin: float = 20
    top_margin: float = 20
    line_height: float = 10
    wrapped_line_height: float = 6
    block_gap: float = 5
    section_gap: float = 5
    column_width: float = 170
    page_break_y: float = 280
    ai_section_break_y: float = 200
    # Fixed-size lines skip the page-break check unless this is set
    break_fixed_lines: bool = False


@dataclass
class PlacedLine:
    page: int
    y: float
    text: str
    font_size: int
    bold: bool = False


@dataclass
class RenderedDocument:
    pdf_bytes: bytes
    page_count: int
    lines: List[PlacedLine] = field(default_factory=list)

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.pdf_bytes).decode("ascii")
        return f"data:application/pdf;filename=generated.pdf;base64,{encoded}"

    def texts(self) -> List[str]:
        return [line.text for line in self.lines]


class LessonPlanRenderer:
    def __init__(self, layout: Optional[PageLayout] = None):
        self.layout = layout or PageLayout()
        self.page_width, self.page_height = A4
        self.buffer = BytesIO()
        self.c = canvas.Canvas(self.buffer, pagesize=A4)
        self.y = self.layout.top_margin
        self.page = 1
        self.lines: List[PlacedLine] = []

    def _new_page(self):
        self.c.showPage()
        self.page += 1
        self.y = self.layout.top_margin

    def _draw(self, text: str, size: int, bold: bool):
        self.c.setFont(FONT_BOLD if bold else FONT_REGULAR, size)
        self.c.drawString(self.layout.left_margin * mm, self.page_height - self.y * mm, text)
        self.lines.append(PlacedLine(page=self.page, y=self.y, text=text, font_size=size, bold=bold))

    def add_text(self, text: str, size: int = 12, bold: bool = False):
        if self.layout.break_fixed_lines and self.y > self.layout.page_break_y:
            self._new_page()
        self._draw(text, size, bold)
        self.y += self.layout.line_height

    def add_wrapped_text(self, text: str, size: int = 12, bold: bool = False):
        font = FONT_BOLD if bold else FONT_REGULAR
        wrapped = simpleSplit(text or "", font, size, self.layout.column_width * mm) or [""]
        for line in wrapped:
            if self.y > self.layout.page_break_y:
                self._new_page()
            self._draw(line, size, bold)
            self.y += self.layout.wrapped_line_height
        self.y += self.layout.block_gap

    def gap(self):
        self.y += self.layout.section_gap

    def render(self, plan: LessonPlan) -> RenderedDocument:
        # Title
        self.add_text(plan.topic or "Lesson Plan", 18, True)
        self.gap()

        # Basic information
        self.add_text(f"Grade Level: {plan.grade_level}")
        self.add_text(f"Main Concept: {plan.main_concept}")
        self.gap()

        for list_field, heading in LIST_SECTIONS:
            items = plan.items(list_field)
            if not items:
                continue
            self.add_text(heading, 14, True)
            for item in items:
                self.add_text(f"• {item}")
            self.gap()

        # Outline always has its five parts
        self.add_text("Lesson Outline", 14, True)
        self.gap()
        for section in OutlineSection:
            self.add_text(section.label, 12, True)
            self.add_wrapped_text(plan.outline.get(section))

        if plan.ai_content:
            if self.y > self.layout.ai_section_break_y:
                self._new_page()
            self.add_text("AI-Generated Content", 14, True)
            self.gap()
            self.add_wrapped_text(plan.ai_content)

        self.c.save()
        return RenderedDocument(pdf_bytes=self.buffer.getvalue(), page_count=self.page, lines=self.lines)


def render_lesson_plan(plan: LessonPlan, layout: Optional[PageLayout] = None) -> RenderedDocument:
    return LessonPlanRenderer(layout).render(plan)


def export_filename(topic: Optional[str]) -> str:
    """`"Photosynthesis: Nature's Solar Power"` -> `photosynthesis_natures_solar_power.pdf`"""
    cleaned = re.sub(r"[^A-Za-z0-9\s]", "", topic or "")
    stem = "_".join(cleaned.split()).lower()
    return f"{stem or DEFAULT_FILENAME}.pdf"
