# app\adapters\api\routers\translation.py
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
import structlog

from app.core.domain.models import AppMode, TranslationHistoryItem
from app.core.use_cases.translate_and_score import TranslateAndScore
from app.core.domain.exceptions import (
    DomainError,
    EmptyInputError,
    LanguageNotSupportedError,
    StorageError,
    TranslationFailedError,
)
from app.adapters.api.dependencies import get_translate_and_score_use_case

logger = structlog.get_logger()

router = APIRouter(prefix="/translate", tags=["Translation"])

class TranslateRequest(BaseModel):
    text: str = Field(..., description="User input, typed or transcribed")
    mode: AppMode = Field(AppMode.SPEAKING, description="SPEAKING (source -> target) or LISTENING")

@router.post(
    "/{lang_code}",
    response_model=TranslationHistoryItem,
    status_code=status.HTTP_200_OK,
    summary="Translate, extract vocabulary and score recall"
)
async def translate(
    lang_code: str,
    request: TranslateRequest,
    use_case: TranslateAndScore = Depends(get_translate_and_score_use_case),
):
    """
    Runs one translation event.

    **Path Parameters:**
    * `lang_code`: target language being learned (`it`, `es`, `fr`, `de`).

    **Returns:**
    * The stored history item; every vocabulary entry carries
      `status`, `match_type` and `similarity`.
    """
    try:
        return await use_case.execute(request.text, request.mode, lang_code)

    except (EmptyInputError, LanguageNotSupportedError) as e:
        logger.warning("translation_bad_request", lang=lang_code, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )

    except TranslationFailedError as e:
        logger.error("translation_upstream_error", lang=lang_code, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )

    except StorageError as e:
        logger.error("translation_storage_error", lang=lang_code, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    except DomainError as e:
        logger.error("translation_domain_error", lang=lang_code, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
