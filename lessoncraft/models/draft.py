from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from lessoncraft.models.lesson_plan import CamelModel, LessonPlan, User


# --- Notifications ---
class Notification(CamelModel):
    variant: Literal["default", "destructive"] = "default"
    title: str
    description: str


# --- Request Models ---
class LessonPlanUpdate(CamelModel):
    topic: Optional[str] = None
    grade_level: Optional[str] = None
    main_concept: Optional[str] = None


class ListItemValue(CamelModel):
    value: str = ""


class TextValue(CamelModel):
    value: str


class EditingToggle(CamelModel):
    editing: bool


# --- Response Models ---
class DraftState(CamelModel):
    lesson_plan: LessonPlan
    is_generating: bool = False
    is_editing_ai: bool = False
    error: Optional[str] = None


class GenerationResponse(CamelModel):
    status: Literal["completed", "discarded"]
    draft: DraftState
    notification: Optional[Notification] = None


class PromptResponse(CamelModel):
    prompt: str


class DataUriResponse(CamelModel):
    filename: str
    data_uri: str


class SessionUser(CamelModel):
    user: User


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class NotificationList(CamelModel):
    notifications: List[Notification] = Field(default_factory=list)
