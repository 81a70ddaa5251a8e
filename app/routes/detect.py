import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import AnalysisResult, DetectRequest
from app.services.ai_detector import AIDetector
from app.services.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/detect")
def detect_usage():
    return {
        "message": "AI Detection API is running!",
        "usage": "Send POST request with JSON body",
        "example": {"text": "Your text to analyze", "language": "en"},
    }


@router.post("/detect", response_model=AnalysisResult, response_model_exclude_none=True)
def detect(request: DetectRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Estimate how much of the text is AI-generated, AI-refined or human-written.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        return AIDetector(llm).detect(request.text, request.language)
    except Exception:
        logger.exception("Detection failed")
        raise HTTPException(status_code=500, detail="Detection failed")
