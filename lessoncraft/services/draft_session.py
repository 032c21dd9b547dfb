# services/draft_session.py
"""
In-memory lesson plan drafts.

Each signed-in user owns one LessonDraft. The draft is the only mutable state
in the service: edits arrive as synchronous calls, and the single await point
is the AI generation call. A generation id is attached to every call so that a
response arriving after the draft moved on (cancel, reset, manual edit of the
AI content) is dropped instead of overwriting newer state.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from lessoncraft.models.draft import DraftState, Notification
from lessoncraft.models.lesson_plan import LessonPlan, ListField, OutlineSection, sample_lesson_plan
from lessoncraft.services.pdf_renderer import RenderedDocument, export_filename, render_lesson_plan
from lessoncraft.services.prompt_builder import build_lesson_prompt
from lessoncraft.utils.ai_client import AIClientError, AIConfigurationError, generate_lesson_content

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

Generator = Callable[[str], Awaitable[str]]

EXPORT_FAILED_MESSAGE = "Failed to generate PDF. Please try again."


# -------------------------
# Exceptions
# -------------------------
class DraftError(Exception):
    pass


class GenerationInProgressError(DraftError):
    pass


class RequiredFieldsMissingError(DraftError):
    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


class ExportError(Exception):
    pass


class GenerationFailed(Exception):
    """Raised by LessonDraft.generate_ai once the failure is recorded on the draft."""

    def __init__(self, message: str, notification: Notification, configuration: bool = False):
        self.message = message
        self.notification = notification
        self.configuration = configuration
        super().__init__(message)


def _error_notification(message: str) -> Notification:
    return Notification(variant="destructive", title="Error", description=message)


def _success_notification(message: str) -> Notification:
    return Notification(title="Success!", description=message)


class LessonDraft:
    def __init__(self, generator: Generator = generate_lesson_content, plan: Optional[LessonPlan] = None):
        self.generator = generator
        self.plan = plan if plan is not None else sample_lesson_plan()
        self.is_generating = False
        self.is_editing_ai = False
        self.error: Optional[str] = None
        self.active_generation_id: Optional[str] = None
        self.notifications: List[Notification] = []

    # --- State ---
    def state(self) -> DraftState:
        return DraftState(
            lesson_plan=self.plan.model_copy(deep=True),
            is_generating=self.is_generating,
            is_editing_ai=self.is_editing_ai,
            error=self.error,
        )

    def notify(self, notification: Notification) -> Notification:
        self.notifications.append(notification)
        return notification

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # --- Field edits ---
    def update_fields(self, **changes: Optional[str]):
        for name in ("topic", "grade_level", "main_concept"):
            value = changes.get(name)
            if value is not None:
                setattr(self.plan, name, value)

    def _check_index(self, field: ListField, index: int) -> List[str]:
        items = self.plan.items(field)
        if not 0 <= index < len(items):
            raise DraftError(f"{field.value} has no item at index {index}")
        return items

    def add_list_item(self, field: ListField, value: str = ""):
        self.plan.items(field).append(value)

    def update_list_item(self, field: ListField, index: int, value: str):
        self._check_index(field, index)[index] = value

    def remove_list_item(self, field: ListField, index: int):
        del self._check_index(field, index)[index]

    def update_outline(self, section: OutlineSection, value: str):
        setattr(self.plan.outline, section.value, value)

    def set_ai_content(self, value: str):
        if self.plan.ai_content is None:
            raise DraftError("There is no AI content to edit yet. Generate it first.")
        self.plan.ai_content = value
        # A manual edit wins over any response still in flight
        self._invalidate_generation()

    def set_editing_ai(self, editing: bool):
        self.is_editing_ai = editing

    def reset(self):
        self._invalidate_generation()
        self.plan = sample_lesson_plan()
        self.is_editing_ai = False
        self.error = None

    # --- AI generation ---
    def build_prompt(self) -> str:
        return build_lesson_prompt(self.plan)

    def _invalidate_generation(self):
        if self.active_generation_id is not None:
            logger.info("Generation %s invalidated", self.active_generation_id)
        self.active_generation_id = None
        self.is_generating = False

    def cancel_generation(self) -> bool:
        was_generating = self.is_generating
        self._invalidate_generation()
        return was_generating

    async def generate_ai(self) -> Tuple[bool, Optional[Notification]]:
        """
        Run one generation call and merge the result into `ai_content`.

        Returns (applied, notification); applied is False when the response
        arrived after the draft stopped waiting for it. Raises
        GenerationInProgressError when a call is already running and
        GenerationFailed after recording a provider or configuration error.
        """
        if self.is_generating:
            raise GenerationInProgressError("AI content is already being generated for this lesson plan.")

        generation_id = uuid.uuid4().hex
        self.active_generation_id = generation_id
        self.is_generating = True
        self.error = None
        prompt = self.build_prompt()

        try:
            content = await self.generator(prompt)
        except AIClientError as e:
            if self.active_generation_id != generation_id:
                logger.info("Ignoring failure of stale generation %s: %s", generation_id, e)
                return False, None
            message = str(e) or "Failed to generate AI content"
            self.error = message
            notification = self.notify(_error_notification(message))
            raise GenerationFailed(message, notification, configuration=isinstance(e, AIConfigurationError)) from e
        finally:
            if self.active_generation_id == generation_id:
                self.is_generating = False

        if self.active_generation_id != generation_id:
            logger.info("Discarding stale generation %s", generation_id)
            return False, None

        self.active_generation_id = None
        self.plan.ai_content = content
        return True, self.notify(_success_notification("AI content generated successfully."))

    # --- Export ---
    def export(self) -> Tuple[str, RenderedDocument]:
        filename = export_filename(self.plan.topic)
        try:
            document = render_lesson_plan(self.plan)
        except Exception as e:
            logger.exception("PDF export failed for %s", filename)
            self.notify(_error_notification(EXPORT_FAILED_MESSAGE))
            raise ExportError(EXPORT_FAILED_MESSAGE) from e
        self.notify(_success_notification("PDF downloaded successfully."))
        logger.info("Exported %s (%d pages)", filename, document.page_count)
        return filename, document

    def submit(self) -> Tuple[str, RenderedDocument]:
        missing = self.plan.missing_required_fields()
        if missing:
            raise RequiredFieldsMissingError(missing)

        now = datetime.now(timezone.utc).isoformat()
        if self.plan.id is None:
            self.plan.id = uuid.uuid4().hex
            self.plan.created_at = now
        self.plan.updated_at = now

        result = self.export()
        self.notify(_success_notification("Lesson plan created successfully."))
        return result


class DraftStore:
    """One draft per username, kept for the lifetime of the process."""

    def __init__(self, generator: Generator = generate_lesson_content):
        self.generator = generator
        self._drafts: Dict[str, LessonDraft] = {}

    def get_or_create(self, username: str) -> LessonDraft:
        if username not in self._drafts:
            self._drafts[username] = LessonDraft(generator=self.generator)
        return self._drafts[username]

    def discard(self, username: str):
        draft = self._drafts.pop(username, None)
        if draft is not None:
            draft.cancel_generation()


draft_store = DraftStore()
