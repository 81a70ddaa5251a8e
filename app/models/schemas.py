from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional


class CamelModel(BaseModel):
    """Models exchanged with the browser use camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- AI Detection ---

class SentenceScore(CamelModel):
    text: str
    ai_probability: int = Field(ge=0, le=100)
    patterns: List[str] = []
    highlighted: bool = False


class DetailedAnalysis(CamelModel):
    vocabulary: int = 70
    syntax: int = 65
    coherence: int = 75
    creativity: int = 70


class AnalysisResult(CamelModel):
    overall_score: int
    ai_generated: int
    ai_refined: int
    human_written: int
    predictability_score: int = 40
    formulaic_patterns: int = 20
    sentences: List[SentenceScore] = []
    detailed_analysis: DetailedAnalysis = DetailedAnalysis()
    word_count: int = 0
    language: str = "en"
    highlighted_text: str = ""
    source: str = "heuristic"
    note: Optional[str] = None


class DetectRequest(CamelModel):
    text: str
    language: str = "en"


# --- Paraphrase & Synonyms ---

class ChangedWord(CamelModel):
    original: str
    replacement: str
    position: Optional[int] = None


class ParaphraseRequest(CamelModel):
    text: str
    mode: str = "standard"
    synonym_level: int = Field(50, ge=0, le=100)
    language: str = "en-US"


class ParaphraseResult(CamelModel):
    original: str
    paraphrased: str
    changed_words: List[ChangedWord] = []
    mode: str
    synonym_level: int
    language: str
    word_count_original: int
    word_count_paraphrased: int
    changes: int
    readability_improvement: int
    similarity_score: int
    mode_description: Optional[str] = None
    source: str
    error: Optional[str] = None


class SynonymRequest(CamelModel):
    word: str
    context: Optional[str] = None
    sentence: Optional[str] = None
    language: str = "en-US"


class SynonymResult(CamelModel):
    word: str
    synonyms: List[str]
    language: str
    context: Optional[str] = None
    count: int
    source: str


# --- Grammar ---

class IssuePosition(CamelModel):
    start: int
    end: int


class GrammarIssue(CamelModel):
    type: str
    subtype: str = ""
    severity: str = "suggestion"
    text: str
    suggestion: str
    explanation: str = ""
    rule: str = ""
    position: IssuePosition


class GrammarRequest(CamelModel):
    text: str
    language: str = "en-US"
    include_explanations: bool = True


class GrammarResult(CamelModel):
    issues: List[GrammarIssue]
    word_count: int
    character_count: int
    confidence: int
    readability_score: float
    readability_label: str
    language: str
    source: str
    note: Optional[str] = None


# --- Summarize ---

class SummarizeRequest(CamelModel):
    text: str
    length: str = "medium"
    mode: str = "paragraph"


class SummaryWordCount(CamelModel):
    original: int
    summary: int


class SummaryResult(CamelModel):
    original_length: int
    summary_length: int
    summary: str
    reduction: int
    mode: str
    length: str
    word_count: SummaryWordCount
    source: str
    note: Optional[str] = None


# --- Plagiarism ---

class PlagiarismRequest(CamelModel):
    text: str
    language: str = "en"
    sources: Optional[List[str]] = None


class PlagiarismSource(CamelModel):
    id: int
    url: str
    title: str
    similarity: float
    matched_text: str
    matched_words: int
    domain: str


class HighlightedSegment(CamelModel):
    text: str
    is_plagiarized: bool
    source_id: Optional[int] = None
    similarity: Optional[float] = None


class PlagiarismResult(CamelModel):
    overall_score: float
    unique_content: float
    plagiarized_percentage: float
    word_count: int
    sources: List[PlagiarismSource]
    highlighted_text: List[HighlightedSegment]
    languages: List[str]
    verdict: str
    source: str


# --- Humanize ---

class HumanizeRequest(CamelModel):
    input_text: str
    humanization_mode: str = "casual"
    creativity_level: int = Field(50, ge=0, le=100)
    language: str = "english"


class DetectorEstimate(CamelModel):
    detector: str
    confidence: float


class HumanizeResult(CamelModel):
    original_text: str
    humanized_text: str
    human_score: float
    ai_detection_before: float
    ai_detection_after: float
    readability_score: float
    creativity_level: int
    ai_detection_results: List[DetectorEstimate] = []
    source: str
    note: Optional[str] = None


# --- Citation ---

class CitationRequest(CamelModel):
    source: str
    format: str = "apa"
    source_type: str = "website"
    author: Optional[str] = None
    title: Optional[str] = None
    year: Optional[str] = None
    url: Optional[str] = None
    publisher: Optional[str] = None


class CitationResult(CamelModel):
    full_citation: str
    in_text_citation: str
    format: str
    source_type: str
    all_formats: Dict[str, str] = {}
    verified: bool
    source: str


# --- Translate ---

class TranslateRequest(CamelModel):
    text: str
    target_language: str = "Spanish"
    source_language: Optional[str] = None


class TranslateResult(CamelModel):
    original: str
    translated: str
    source_language: Optional[str] = None
    target_language: str
    confidence: int
    source: str
    message: Optional[str] = None
