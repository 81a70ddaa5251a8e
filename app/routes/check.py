import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import GrammarRequest, GrammarResult, PlagiarismRequest, PlagiarismResult
from app.services.grammar_checker import GrammarChecker
from app.services.llm_client import LLMClient, get_llm_client
from app.services.plagiarism_checker import PlagiarismChecker
from app.services.writing_analyzer import WritingAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter()
analyzer = WritingAnalyzer()


@router.get("/grammar")
def grammar_usage():
    return {
        "message": "Grammar Check API is running!",
        "usage": "Send POST request with JSON body",
        "example": {"text": "Your text to check here...", "language": "en-US", "includeExplanations": True},
    }


@router.post("/grammar", response_model=GrammarResult, response_model_exclude_none=True)
def check_grammar(request: GrammarRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Grammar, spelling, punctuation and style issues with character positions.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        return GrammarChecker(llm, analyzer).check(request.text, request.language, request.include_explanations)
    except Exception:
        logger.exception("Grammar check failed")
        raise HTTPException(status_code=500, detail="Grammar check failed")


@router.get("/plagiarism")
def plagiarism_usage():
    return {
        "message": "Plagiarism Check API is running!",
        "usage": "Send POST request with JSON body",
        "example": {"text": "Your text to check", "language": "en", "sources": ["Optional source text"]},
    }


@router.post("/plagiarism", response_model=PlagiarismResult, response_model_exclude_none=True)
def check_plagiarism(request: PlagiarismRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Check plagiarism against optional sources, or produce an estimated report.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        return PlagiarismChecker(llm).check(request.text, request.language, request.sources)
    except Exception:
        logger.exception("Plagiarism check failed")
        raise HTTPException(status_code=500, detail="Plagiarism check failed")
