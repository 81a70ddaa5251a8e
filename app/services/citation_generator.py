import logging
from typing import Dict, Optional

from app.models.schemas import CitationRequest, CitationResult
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable

logger = logging.getLogger(__name__)

STYLES = ("apa", "mla", "chicago", "harvard")

SYSTEM_PROMPT = (
    "You are a citation generator. Create accurate citations in various formats (APA, MLA, Chicago, Harvard). "
    "Always return valid JSON with fullCitation and inTextCitation fields."
)


def _fields(request: CitationRequest) -> Dict[str, str]:
    return {
        "author": request.author or "Unknown Author",
        "title": request.title or request.source,
        "year": request.year or "n.d.",
        "publisher": request.publisher or "",
        "url": request.url or "",
    }


def format_citations(request: CitationRequest) -> Dict[str, str]:
    """Full reference in every supported style."""
    f = _fields(request)
    publisher = f" {f['publisher']}." if f["publisher"] else ""
    publisher_before_year = f" {f['publisher']}," if f["publisher"] else ""
    url = f" {f['url']}" if f["url"] else ""
    return {
        "apa": f"{f['author']} ({f['year']}). {f['title']}.{publisher}{url}",
        "mla": f"{f['author']}. \"{f['title']}.\"{publisher_before_year} {f['year']}. Web.",
        "chicago": f"{f['author']}. \"{f['title']}.\"{publisher_before_year} {f['year']}.{url}",
        "harvard": f"{f['author']} ({f['year']}) {f['title']}.{publisher}"
                   + (f" Available at: {f['url']}" if f["url"] else ""),
    }


def in_text_citation(request: CitationRequest, style: str) -> str:
    f = _fields(request)
    # "Doe, Jane" and "Jane Doe" both give "Doe".
    names = (request.author or "").split(",")[0].split()
    surname = names[-1] if names else "Unknown Author"
    if style == "mla":
        return f"({surname})"
    if style == "chicago":
        return f"({surname} {f['year']})"
    return f"({surname}, {f['year']})"


class CitationGenerator:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    def template(self, request: CitationRequest, style: str, source: str = "template") -> CitationResult:
        citations = format_citations(request)
        return CitationResult(
            full_citation=citations[style],
            in_text_citation=in_text_citation(request, style),
            format=style,
            source_type=request.source_type,
            all_formats=citations,
            verified=False,
            source=source,
        )

    def generate(self, request: CitationRequest) -> CitationResult:
        style = request.format.lower()
        if style not in STYLES:
            style = "apa"

        prompt = (f'Generate {style} format citation for this {request.source_type} source: "{request.source}". '
                  "Return JSON with fullCitation and inTextCitation fields.")
        try:
            raw = self.llm.complete_json(SYSTEM_PROMPT, prompt, max_tokens=300)
        except LLMUnavailable:
            logger.info("GROQ_API_KEY not set, using citation templates")
            return self.template(request, style)
        except LLMError as e:
            logger.warning("Citation generation fell back to templates: %s", e)
            return self.template(request, style, source="error_fallback")

        full: Optional[str] = raw.get("fullCitation")
        in_text: Optional[str] = raw.get("inTextCitation")
        if not isinstance(full, str) or not isinstance(in_text, str):
            logger.warning("Citation response missing fields, using templates")
            return self.template(request, style, source="error_fallback")

        return CitationResult(
            full_citation=full,
            in_text_citation=in_text,
            format=style,
            source_type=request.source_type,
            all_formats=format_citations(request),
            verified=True,
            source="ai_generated",
        )
