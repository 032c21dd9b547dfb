import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from lessoncraft.api.routes_auth import get_draft_store
from lessoncraft.core.security import SessionContext, get_current_session
from lessoncraft.models.draft import (
    DataUriResponse,
    DraftState,
    EditingToggle,
    GenerationResponse,
    LessonPlanUpdate,
    ListItemValue,
    NotificationList,
    PromptResponse,
    TextValue,
)
from lessoncraft.models.lesson_plan import ListField, OutlineSection
from lessoncraft.services.draft_session import (
    DraftError,
    DraftStore,
    ExportError,
    GenerationFailed,
    GenerationInProgressError,
    LessonDraft,
    RequiredFieldsMissingError,
)
from lessoncraft.services.pdf_renderer import RenderedDocument

router = APIRouter()

# -------------------------
# Logging Configuration
# -------------------------
logger = logging.getLogger("lesson_plan_api")
logger.setLevel(logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# -------------------------
# Dependencies
# -------------------------
def get_draft(
    session: SessionContext = Depends(get_current_session),
    store: DraftStore = Depends(get_draft_store),
) -> LessonDraft:
    return store.get_or_create(session.username)


def _pdf_response(filename: str, document: RenderedDocument) -> Response:
    return Response(
        content=document.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _edit(action, *args):
    try:
        action(*args)
    except DraftError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# -------------------------
# Draft editing
# -------------------------
@router.get("/lesson-plan", response_model=DraftState)
def read_draft(draft: LessonDraft = Depends(get_draft)):
    return draft.state()


@router.patch("/lesson-plan", response_model=DraftState)
def update_draft(update: LessonPlanUpdate, draft: LessonDraft = Depends(get_draft)):
    draft.update_fields(**update.model_dump(exclude_none=True))
    return draft.state()


@router.post("/lesson-plan/reset", response_model=DraftState)
def reset_draft(draft: LessonDraft = Depends(get_draft)):
    draft.reset()
    return draft.state()


@router.post("/lesson-plan/lists/{field}", response_model=DraftState)
def add_list_item(
    field: ListField, item: Optional[ListItemValue] = None, draft: LessonDraft = Depends(get_draft)
):
    draft.add_list_item(field, item.value if item else "")
    return draft.state()


@router.put("/lesson-plan/lists/{field}/{index}", response_model=DraftState)
def update_list_item(field: ListField, index: int, item: ListItemValue, draft: LessonDraft = Depends(get_draft)):
    _edit(draft.update_list_item, field, index, item.value)
    return draft.state()


@router.delete("/lesson-plan/lists/{field}/{index}", response_model=DraftState)
def remove_list_item(field: ListField, index: int, draft: LessonDraft = Depends(get_draft)):
    _edit(draft.remove_list_item, field, index)
    return draft.state()


@router.put("/lesson-plan/outline/{section}", response_model=DraftState)
def update_outline(section: OutlineSection, body: TextValue, draft: LessonDraft = Depends(get_draft)):
    draft.update_outline(section, body.value)
    return draft.state()


@router.put("/lesson-plan/ai-content", response_model=DraftState)
def update_ai_content(body: TextValue, draft: LessonDraft = Depends(get_draft)):
    try:
        draft.set_ai_content(body.value)
    except DraftError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return draft.state()


@router.put("/lesson-plan/ai-content/editing", response_model=DraftState)
def toggle_ai_editing(body: EditingToggle, draft: LessonDraft = Depends(get_draft)):
    draft.set_editing_ai(body.editing)
    return draft.state()


# -------------------------
# AI generation
# -------------------------
@router.get("/lesson-plan/prompt", response_model=PromptResponse)
def preview_prompt(draft: LessonDraft = Depends(get_draft)):
    return PromptResponse(prompt=draft.build_prompt())


@router.post("/lesson-plan/generate", response_model=GenerationResponse, summary="Generate AI lesson content")
async def generate_ai_content(
    draft: LessonDraft = Depends(get_draft),
    session: SessionContext = Depends(get_current_session),
):
    try:
        applied, notification = await draft.generate_ai()
    except GenerationInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except GenerationFailed as e:
        logger.warning(f"AI generation failed for {session.username}: {e.message}")
        code = status.HTTP_503_SERVICE_UNAVAILABLE if e.configuration else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(
            status_code=code,
            detail={"message": e.message, "notification": e.notification.model_dump(by_alias=True)},
        )

    logger.info(f"AI generation for {session.username} {'applied' if applied else 'discarded'}")
    return GenerationResponse(
        status="completed" if applied else "discarded",
        draft=draft.state(),
        notification=notification,
    )


@router.delete("/lesson-plan/generate", response_model=DraftState)
def cancel_generation(draft: LessonDraft = Depends(get_draft)):
    draft.cancel_generation()
    return draft.state()


# -------------------------
# Export
# -------------------------
@router.get("/lesson-plan/export")
def export_pdf(draft: LessonDraft = Depends(get_draft)):
    try:
        filename, document = draft.export()
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return _pdf_response(filename, document)


@router.get("/lesson-plan/export/data-uri", response_model=DataUriResponse)
def export_data_uri(draft: LessonDraft = Depends(get_draft)):
    try:
        filename, document = draft.export()
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return DataUriResponse(filename=filename, data_uri=document.data_uri())


@router.post("/lesson-plan/submit")
def submit_lesson_plan(
    draft: LessonDraft = Depends(get_draft),
    session: SessionContext = Depends(get_current_session),
):
    """
    Validate the draft, stamp it, and return the exported PDF.
    """
    try:
        filename, document = draft.submit()
    except RequiredFieldsMissingError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing": e.missing},
        )
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Lesson plan {draft.plan.id} submitted by {session.username}")
    return _pdf_response(filename, document)


@router.get("/lesson-plan/notifications", response_model=NotificationList)
def drain_notifications(draft: LessonDraft = Depends(get_draft)):
    return NotificationList(notifications=draft.drain_notifications())
