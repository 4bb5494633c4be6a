# routers/api.py
"""
HTTP routes: one-shot translation, language detection and history.
"""

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from odiai.languages import Language, SOURCE_LANGUAGES
from odiai.utils.controller import FAILURE_MESSAGE
from odiai.utils.history import DISPLAY_LIMIT, MAX_HISTORY
from odiai.utils.translation import TranslationTransportError

router = APIRouter()


class TranslateRequest(BaseModel):
    text: str
    source_language: Language = Language.AUTO


class DetectRequest(BaseModel):
    text: str


@router.post("/translate")
async def translate(body: TranslateRequest, request: Request):
    if body.source_language not in SOURCE_LANGUAGES:
        raise HTTPException(status_code=422, detail=f"{body.source_language.value} is not a source language")

    try:
        result = await request.app.state.translator.translate_result(body.text.strip(), body.source_language)
    except TranslationTransportError:
        raise HTTPException(status_code=502, detail=FAILURE_MESSAGE)

    return {
        "translated_text": result.text,
        "status": result.status,
        "source_language": body.source_language.value,
        "target_language": Language.ODIA.value,
    }


@router.post("/detect")
async def detect(body: DetectRequest, request: Request):
    language = await request.app.state.translator.detect_language(body.text.strip())
    return {"language": language.value}


@router.get("/history")
async def get_history(request: Request, limit: int = Query(DISPLAY_LIMIT, ge=1, le=MAX_HISTORY)):
    history = request.app.state.history
    return {
        "total": len(history),
        "entries": [record.to_dict() for record in history.recent(limit)],
    }


@router.delete("/history")
async def clear_history(request: Request):
    request.app.state.history.clear()
    return {"status": "cleared"}
