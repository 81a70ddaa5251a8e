import logging

from fastapi import APIRouter, Depends, HTTPException

from app import config
from app.models.schemas import (
    HumanizeRequest,
    HumanizeResult,
    ParaphraseRequest,
    ParaphraseResult,
    SummarizeRequest,
    SummaryResult,
    SynonymRequest,
    SynonymResult,
    TranslateRequest,
    TranslateResult,
)
from app.services.humanizer import Humanizer
from app.services.llm_client import LLMClient, get_llm_client
from app.services.paraphraser import Paraphraser
from app.services.summarizer import LENGTHS, MODES, Summarizer
from app.services.translator import Translator
from app.utils.text_processing import word_count

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/paraphrase", response_model=ParaphraseResult, response_model_exclude_none=True)
def paraphrase(request: ParaphraseRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Rewrite text in the selected mode (standard, fluency, formal, creative, ...).
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    words = word_count(request.text)
    if words > config.PARAPHRASE_WORD_LIMIT:
        raise HTTPException(
            status_code=400,
            detail=f"Text exceeds {config.PARAPHRASE_WORD_LIMIT} word limit ({words} words)",
        )

    try:
        return Paraphraser(llm).paraphrase(request.text, request.mode, request.synonym_level, request.language)
    except Exception:
        logger.exception("Paraphrase failed")
        raise HTTPException(status_code=500, detail="Paraphrase failed")


@router.post("/synonyms", response_model=SynonymResult, response_model_exclude_none=True)
def synonyms(request: SynonymRequest, llm: LLMClient = Depends(get_llm_client)):
    if not request.word.strip():
        raise HTTPException(status_code=400, detail="Word is required")

    try:
        return Paraphraser(llm).synonyms(request.word, request.sentence or request.context, request.language)
    except Exception:
        logger.exception("Synonym lookup failed")
        raise HTTPException(status_code=500, detail="Synonym lookup failed")


@router.get("/humanize")
def humanize_usage():
    return {
        "message": "Humanize API is running!",
        "usage": "Send POST request with JSON body",
        "example": {
            "inputText": "Your text here",
            "humanizationMode": "casual",
            "creativityLevel": 80,
            "language": "english",
        },
    }


@router.post("/humanize", response_model=HumanizeResult, response_model_exclude_none=True)
def humanize(request: HumanizeRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Rewrite text to read like spontaneous human speech.
    """
    if not request.input_text.strip():
        raise HTTPException(status_code=400, detail="Input text is required")

    try:
        return Humanizer(llm).humanize(
            request.input_text, request.humanization_mode, request.creativity_level, request.language
        )
    except Exception:
        logger.exception("Humanization failed")
        raise HTTPException(status_code=500, detail="Humanization failed")


@router.get("/summarize")
def summarize_usage():
    return {
        "message": "Summarize API is running!",
        "usage": "Send POST request with JSON body",
        "example": {"text": "Your text to summarize here...", "length": "medium", "mode": "paragraph"},
    }


@router.post("/summarize", response_model=SummaryResult, response_model_exclude_none=True)
def summarize(request: SummarizeRequest, llm: LLMClient = Depends(get_llm_client)):
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")
    if request.length not in LENGTHS:
        raise HTTPException(status_code=400, detail="Length must be one of: short, medium, long")
    if request.mode not in MODES:
        raise HTTPException(status_code=400, detail="Mode must be one of: paragraph, bullet, custom")

    try:
        return Summarizer(llm).summarize(request.text, request.length, request.mode)
    except Exception:
        logger.exception("Summarization failed")
        raise HTTPException(status_code=500, detail="Summarization failed")


@router.post("/translate", response_model=TranslateResult, response_model_exclude_none=True)
def translate(request: TranslateRequest, llm: LLMClient = Depends(get_llm_client)):
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        return Translator(llm).translate(request.text, request.target_language, request.source_language)
    except Exception:
        logger.exception("Translation failed")
        raise HTTPException(status_code=500, detail="Translation failed")
