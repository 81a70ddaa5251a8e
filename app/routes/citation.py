import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models.schemas import CitationRequest, CitationResult
from app.services.citation_generator import CitationGenerator
from app.services.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/citation", response_model=CitationResult)
def generate_citation(request: CitationRequest, llm: LLMClient = Depends(get_llm_client)):
    """
    Format a reference in APA, MLA, Chicago or Harvard style.
    """
    if not request.source.strip():
        raise HTTPException(status_code=400, detail="Source information required")

    try:
        return CitationGenerator(llm).generate(request)
    except Exception:
        logger.exception("Citation generation failed")
        raise HTTPException(status_code=500, detail="Citation generation failed")
