from lessoncraft.models.lesson_plan import LessonPlan, sample_lesson_plan
from lessoncraft.services.prompt_builder import build_lesson_prompt


def test_prompt_is_deterministic():
    plan = sample_lesson_plan()
    assert build_lesson_prompt(plan) == build_lesson_prompt(plan)
    assert build_lesson_prompt(plan) == build_lesson_prompt(sample_lesson_plan())


def test_prompt_embeds_plan_fields():
    prompt = build_lesson_prompt(sample_lesson_plan())

    assert "Topic: Photosynthesis: Nature's Solar Power\n" in prompt
    assert "Grade Level: 6th Grade\n" in prompt
    assert (
        "Sub-topics: Light energy and chlorophyll, Carbon dioxide and water as reactants, "
        "Glucose and oxygen as products, The role of chloroplasts\n"
    ) in prompt
    assert "Learning Objectives: Explain the basic process of photosynthesis, " in prompt
    # Materials are not part of the prompt
    assert "Microscope" not in prompt


def test_prompt_requests_three_sections():
    prompt = build_lesson_prompt(sample_lesson_plan())

    first = prompt.index("1. Detailed Lesson Content")
    second = prompt.index("2. Suggested Classroom Activities")
    third = prompt.index("3. Assessment Strategies")
    assert first < second < third
    assert prompt.endswith("suitable for a professional lesson plan.")


def test_blank_plan_renders_empty_placeholders():
    prompt = build_lesson_prompt(LessonPlan())

    assert prompt.startswith("Create a detailed lesson plan for the following:\nTopic: \n")
    assert "Sub-topics: \nLearning Objectives: \n" in prompt
