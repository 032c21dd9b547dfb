import base64

import pytest

from lessoncraft.models.lesson_plan import LessonOutline, LessonPlan, sample_lesson_plan
from lessoncraft.services.pdf_renderer import PageLayout, export_filename, render_lesson_plan

OUTLINE_LABELS = ["Introduction:", "Development:", "Practice:", "Assessment:", "Closure:"]


def test_output_is_a_pdf():
    document = render_lesson_plan(sample_lesson_plan())

    assert document.pdf_bytes.startswith(b"%PDF")
    assert document.page_count >= 1
    assert document.data_uri().startswith("data:application/pdf;filename=generated.pdf;base64,")
    encoded = document.data_uri().split("base64,", 1)[1]
    assert base64.b64decode(encoded) == document.pdf_bytes


def test_sections_follow_fixed_order():
    plan = sample_lesson_plan()
    plan.ai_content = "Some generated notes"
    texts = render_lesson_plan(plan).texts()

    order = [
        "Photosynthesis: Nature's Solar Power",
        "Grade Level: 6th Grade",
        "Sub-topics:",
        "Materials Needed:",
        "Learning Objectives:",
        "Lesson Outline",
        "Introduction:",
        "Closure:",
        "AI-Generated Content",
    ]
    positions = [texts.index(t) for t in order]
    assert positions == sorted(positions)
    assert "• Microscope" in texts


def test_empty_lists_omit_their_headings(bare_plan):
    texts = render_lesson_plan(bare_plan).texts()

    assert "Sub-topics:" not in texts
    assert "Materials Needed:" not in texts
    assert "Learning Objectives:" not in texts
    assert "AI-Generated Content" not in texts


@pytest.mark.parametrize("outline", [LessonOutline(), sample_lesson_plan().outline])
def test_outline_always_has_five_labels_in_order(outline):
    document = render_lesson_plan(LessonPlan(outline=outline))
    labels = [line.text for line in document.lines if line.text in OUTLINE_LABELS]

    assert labels == OUTLINE_LABELS


def test_blank_topic_uses_default_title():
    document = render_lesson_plan(LessonPlan())

    assert document.lines[0].text == "Lesson Plan"
    assert document.lines[0].font_size == 18
    assert document.lines[0].bold


def test_long_outline_breaks_once_at_threshold(bare_plan):
    layout = PageLayout()
    bare_plan.outline.introduction = "\n".join(f"Line {i}" for i in range(60))
    document = render_lesson_plan(bare_plan, layout)

    body = [line for line in document.lines if line.text.startswith("Line ")]
    first_page = [line for line in body if line.page == 1]
    second_page = [line for line in body if line.page == 2]

    assert document.page_count == 2
    assert len(first_page) + len(second_page) == 60
    assert all(line.y <= layout.page_break_y for line in first_page)
    assert first_page[-1].y + layout.wrapped_line_height > layout.page_break_y
    assert second_page[0].y == layout.top_margin
    assert second_page[0].text == f"Line {len(first_page)}"
    # 33 lines fit below "Introduction:" on the first page
    assert len(first_page) == 33


def test_ai_content_starts_new_page_when_cursor_is_low(bare_plan):
    bare_plan.sub_topics = ["One", "Two", "Three"]
    bare_plan.ai_content = "Generated"
    document = render_lesson_plan(bare_plan)

    heading = next(line for line in document.lines if line.text == "AI-Generated Content")
    closure_body = next(line for line in document.lines if line.text == "Close")
    assert closure_body.page == 1
    assert heading.page == 2
    assert heading.y == PageLayout().top_margin


def test_ai_content_stays_on_page_when_space_remains(bare_plan):
    bare_plan.ai_content = "Generated"
    document = render_lesson_plan(bare_plan)

    heading = next(line for line in document.lines if line.text == "AI-Generated Content")
    assert document.page_count == 1
    assert heading.page == 1
    assert heading.y <= PageLayout().ai_section_break_y


def test_fixed_lines_do_not_break_by_default(bare_plan):
    bare_plan.materials = [f"Item {i}" for i in range(30)]
    document = render_lesson_plan(bare_plan)

    items = [line for line in document.lines if line.text.startswith("• Item")]
    assert {line.page for line in items} == {1}
    assert items[-1].y > PageLayout().page_break_y


def test_fixed_lines_break_when_enabled(bare_plan):
    layout = PageLayout(break_fixed_lines=True)
    bare_plan.materials = [f"Item {i}" for i in range(30)]
    document = render_lesson_plan(bare_plan, layout)

    items = [line for line in document.lines if line.text.startswith("• Item")]
    assert document.page_count >= 2
    assert all(line.y <= layout.page_break_y for line in items)
    assert next(line for line in items if line.page == 2).y == layout.top_margin


def test_long_paragraph_is_wrapped_to_column():
    plan = LessonPlan(outline=LessonOutline(introduction="photosynthesis " * 80))
    document = render_lesson_plan(plan)

    wrapped = [line for line in document.lines if line.text.startswith("photosynthesis")]
    assert len(wrapped) > 1


@pytest.mark.parametrize(
    "topic,expected",
    [
        ("Photosynthesis: Nature's Solar Power", "photosynthesis_natures_solar_power.pdf"),
        ("", "lesson_plan.pdf"),
        (None, "lesson_plan.pdf"),
        ("?!", "lesson_plan.pdf"),
        ("  Fractions   101 ", "fractions_101.pdf"),
    ],
)
def test_export_filename(topic, expected):
    assert export_filename(topic) == expected
