# app\adapters\api\routers\vocabulary.py
from typing import List
from fastapi import APIRouter, Depends, status
from dependency_injector.wiring import inject, Provide
import structlog

from app.core.domain.models import RankedWords, TranslationHistoryItem, WordItem
from app.core.use_cases.vocabulary_ledger import VocabularyLedger
from app.adapters.api.dependencies import verify_api_key
from app.shared.container import Container

logger = structlog.get_logger()

router = APIRouter(tags=["Vocabulary"])

@router.get("/words/{lang_code}", response_model=List[WordItem])
@inject
async def list_words(
    lang_code: str,
    ledger: VocabularyLedger = Depends(Provide[Container.vocabulary_ledger]),
):
    """All word records for a target language."""
    return await ledger.get_words(lang_code)

@router.get("/words/{lang_code}/ranked", response_model=RankedWords)
@inject
async def ranked_words(
    lang_code: str,
    ledger: VocabularyLedger = Depends(Provide[Container.vocabulary_ledger]),
):
    """Hottest words first: top 10, then the next 50."""
    return await ledger.ranked_words(lang_code)

@router.get("/history/{lang_code}", response_model=List[TranslationHistoryItem])
@inject
async def history(
    lang_code: str,
    ledger: VocabularyLedger = Depends(Provide[Container.vocabulary_ledger]),
):
    """Translation events, newest first."""
    return await ledger.get_history(lang_code)

@router.delete(
    "/data",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_api_key)],
    summary="Wipe all words and history"
)
@inject
async def clear_data(
    ledger: VocabularyLedger = Depends(Provide[Container.vocabulary_ledger]),
):
    removed = await ledger.clear_all()
    return {"status": "cleared", "keys_removed": removed}
