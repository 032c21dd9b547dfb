from lessoncraft.models.lesson_plan import LessonPlan


# -------------------------
# Prompt Builder
# -------------------------
def build_lesson_prompt(plan: LessonPlan) -> str:
    """
    Build the instruction sent to the text-generation model.

    The output depends only on `plan`; blank fields are embedded as empty text.
    """
    return f"""Create a detailed lesson plan for the following:
Topic: {plan.topic}
Grade Level: {plan.grade_level}
Main Concept: {plan.main_concept}
Sub-topics: {', '.join(plan.sub_topics)}
Learning Objectives: {', '.join(plan.objectives)}

Please provide a structured response with the following sections:
1. Detailed Lesson Content
   - Key concepts and vocabulary
   - Step-by-step teaching points
   - Examples and analogies

2. Suggested Classroom Activities
   - Warm-up activities
   - Main learning activities
   - Group work suggestions
   - Interactive elements

3. Assessment Strategies
   - Formative assessment questions
   - Exit ticket ideas
   - Extension activities
   - Differentiation suggestions

Format the response in a clear, organized manner suitable for a professional lesson plan."""
