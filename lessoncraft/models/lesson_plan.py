# models/lesson_plan.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanged with the form client using camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(CamelModel):
    email: str
    name: str


class ListField(str, Enum):
    """List fields that share the add / edit / remove handlers."""

    SUB_TOPICS = "subTopics"
    MATERIALS = "materials"
    OBJECTIVES = "objectives"

    @property
    def attribute(self) -> str:
        return {
            ListField.SUB_TOPICS: "sub_topics",
            ListField.MATERIALS: "materials",
            ListField.OBJECTIVES: "objectives",
        }[self]


class OutlineSection(str, Enum):
    """The five outline parts, in the order they are shown and printed."""

    INTRODUCTION = "introduction"
    DEVELOPMENT = "development"
    PRACTICE = "practice"
    ASSESSMENT = "assessment"
    CLOSURE = "closure"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()}:"


class LessonOutline(CamelModel):
    introduction: str = ""
    development: str = ""
    practice: str = ""
    assessment: str = ""
    closure: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    def get(self, section: OutlineSection) -> str:
        return getattr(self, section.value)


class LessonPlan(CamelModel):
    id: Optional[str] = None
    topic: str = ""
    grade_level: str = ""
    main_concept: str = ""
    sub_topics: List[str] = Field(default_factory=list)
    materials: List[str] = Field(default_factory=list)
    objectives: List[str] = Field(default_factory=list)
    outline: LessonOutline = Field(default_factory=LessonOutline)
    ai_content: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("topic", "grade_level", "main_concept", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("sub_topics", "materials", "objectives", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return [] if v is None else v

    @field_validator("outline", mode="before")
    @classmethod
    def none_to_outline(cls, v):
        return LessonOutline() if v is None else v

    def items(self, field: ListField) -> List[str]:
        return getattr(self, field.attribute)

    def missing_required_fields(self) -> List[str]:
        """Return the wire names of required fields that are blank."""
        missing = []
        for name in ("topic", "grade_level", "main_concept"):
            if not getattr(self, name).strip():
                missing.append(to_camel(name))
        for section in OutlineSection:
            if not self.outline.get(section).strip():
                missing.append(f"outline.{section.value}")
        return missing


def sample_lesson_plan() -> LessonPlan:
    """Placeholder content every new draft starts from."""
    return LessonPlan(
        topic="Photosynthesis: Nature's Solar Power",
        grade_level="6th Grade",
        main_concept="Understanding how plants convert sunlight into energy through photosynthesis",
        sub_topics=[
            "Light energy and chlorophyll",
            "Carbon dioxide and water as reactants",
            "Glucose and oxygen as products",
            "The role of chloroplasts",
        ],
        materials=[
            "Live plants",
            "Microscope",
            "Plant cell diagrams",
            "Colored pencils",
            "Photosynthesis simulation software",
        ],
        objectives=[
            "Explain the basic process of photosynthesis",
            "Identify the key components needed for photosynthesis",
            "Draw and label the parts of a chloroplast",
            "Describe how plants store and use energy",
        ],
        outline=LessonOutline(
            introduction=(
                "Begin with a demonstration using a live plant and asking students how they think "
                "plants get their food. Connect this to their prior knowledge about energy and living things."
            ),
            development=(
                "Use interactive diagrams and models to explain the photosynthesis process. Guide students "
                "through the reactants and products using molecular models. Demonstrate the role of "
                "chloroplasts using microscope observations."
            ),
            practice=(
                "Students will work in groups to create their own photosynthesis models, label diagrams, "
                "and run simple experiments with plants in different light conditions."
            ),
            assessment=(
                "Students will complete a concept map showing the relationships between sunlight, "
                "chlorophyll, water, carbon dioxide, glucose, and oxygen in photosynthesis."
            ),
            closure=(
                "Review key concepts through a quick quiz game. Students share one new thing they "
                "learned about how plants make their own food."
            ),
        ),
    )
