from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app import config
from app.routes import check, citation, detect, rewrite
from app.services.llm_client import LLMClient, get_llm_client

router = APIRouter()

router.include_router(detect.router, prefix="/api", tags=["AI Detection"])
router.include_router(check.router, prefix="/api", tags=["Grammar & Plagiarism"])
router.include_router(rewrite.router, prefix="/api", tags=["Rewriting"])
router.include_router(citation.router, prefix="/api", tags=["Citations"])

ENDPOINTS = [
    "/api/detect",
    "/api/paraphrase",
    "/api/synonyms",
    "/api/grammar",
    "/api/summarize",
    "/api/plagiarism",
    "/api/humanize",
    "/api/citation",
    "/api/translate",
]


@router.get("/api/health", tags=["Status"])
def health():
    return {
        "status": "OK",
        "message": f"{config.APP_NAME} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.APP_VERSION,
        "endpoints": ENDPOINTS,
    }


@router.get("/api/info", tags=["Status"])
def info(llm: LLMClient = Depends(get_llm_client)):
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "totalEndpoints": len(ENDPOINTS),
        "hasApiKey": llm.enabled,
        "status": "operational",
    }
