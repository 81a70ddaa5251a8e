import logging
import random
import re
from typing import Any, Dict, List, Optional

from app.models.schemas import ChangedWord, ParaphraseResult, SynonymResult
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable
from app.utils.text_processing import word_count

logger = logging.getLogger(__name__)

MODE_INSTRUCTIONS = {
    "standard": "Maintain natural flow while making appropriate word substitutions.",
    "fluency": "Focus on smooth, natural-sounding language.",
    "formal": "Use professional, business-appropriate language.",
    "simple": "Use simpler words and clearer sentence structures.",
    "creative": "Use imaginative word choices and varied structures.",
    "expand": "Add descriptive details and elaboration.",
    "shorten": "Condense to essential information.",
    "academic": "Use scholarly language and formal tone.",
    "humanize": "Make it sound natural and conversational.",
    "custom": "Apply balanced paraphrasing.",
}

# Phrase substitutions per mode, applied in order.
TRANSFORMS: Dict[str, Dict[str, str]] = {
    "standard": {
        "Artificial Intelligence": "AI technology",
        "AI": "Artificial Intelligence",
        "is reshaping": "is transforming",
        "reshaping": "transforming",
        "marketing landscape": "marketing field",
        "landscape": "environment",
        "enabling": "allowing",
        "businesses": "companies",
        "engage": "interact with",
        "customers": "clients",
        "unprecedented": "remarkable",
        "precision": "accuracy",
        "efficiency": "effectiveness",
        "leveraging": "using",
        "data-driven": "information-based",
        "insights": "analysis",
        "automation": "automated processes",
        "predictive analytics": "forecasting tools",
        "empowers": "enables",
        "marketers": "marketing professionals",
        "create": "develop",
        "personalized": "customized",
        "scalable": "adaptable",
        "impactful": "effective",
        "campaigns": "initiatives",
        "explores": "examines",
        "transforming": "changing",
        "strategies": "approaches",
        "applications": "uses",
        "benefits": "advantages",
        "challenges": "difficulties",
        "future": "upcoming",
        "potential": "possibilities",
    },
    "fluency": {
        "Artificial Intelligence": "AI",
        "is reshaping": "is transforming",
        "enabling businesses": "helping companies",
        "engage customers": "connect with customers",
        "unprecedented precision": "exceptional accuracy",
        "leveraging": "by using",
        "empowers marketers": "allows marketers",
    },
    "formal": {
        "Artificial Intelligence": "Artificial Intelligence technology",
        "reshaping": "fundamentally transforming",
        "enabling": "facilitating",
        "businesses": "commercial enterprises",
        "engage": "establish engagement with",
        "customers": "clientele",
        "unprecedented": "unparalleled",
        "leveraging": "utilizing",
    },
    "creative": {
        "reshaping": "revolutionizing",
        "landscape": "arena",
        "enabling": "empowering",
        "unprecedented": "groundbreaking",
        "leveraging": "harnessing",
        "empowers": "equips",
    },
}

SYNONYMS: Dict[str, List[str]] = {
    "good": ["excellent", "superb", "outstanding", "great", "fine", "splendid"],
    "bad": ["poor", "terrible", "awful", "inferior", "dreadful", "horrible"],
    "big": ["large", "huge", "substantial", "considerable", "massive", "sizeable"],
    "small": ["tiny", "little", "compact", "miniature", "petite", "minute"],
    "make": ["create", "produce", "generate", "build", "construct", "craft"],
    "use": ["utilize", "employ", "apply", "leverage", "deploy", "implement"],
    "help": ["assist", "aid", "support", "facilitate", "enable", "benefit"],
    "show": ["demonstrate", "display", "exhibit", "illustrate", "reveal", "present"],
    "get": ["obtain", "acquire", "receive", "gain", "secure", "procure"],
    "businesses": ["companies", "enterprises", "organizations", "firms", "corporations"],
    "interact": ["engage", "communicate", "connect", "interface"],
    "clients": ["customers", "consumers", "patrons", "buyers"],
    "previously": ["formerly", "earlier", "before", "prior"],
    "accuracy": ["precision", "correctness", "exactness", "reliability"],
    "efficiency": ["effectiveness", "productivity", "performance"],
    "artificial": ["synthetic", "simulated", "manufactured"],
    "intelligence": ["intellect", "understanding", "reasoning"],
    "marketing": ["promotion", "advertising", "branding"],
    "environment": ["landscape", "arena", "sphere", "field"],
    "enables": ["allows", "permits", "empowers", "facilitates"],
    "marketers": ["advertisers", "promoters", "professionals"],
    "develop": ["create", "build", "design", "produce"],
    "scalable": ["expandable", "flexible", "adaptable"],
    "impactful": ["effective", "powerful", "influential"],
    "personalised": ["customized", "tailored", "individualized"],
    "campaigns": ["initiatives", "drives", "efforts", "programs"],
    "data": ["information", "statistics", "metrics", "analytics"],
    "insights": ["understanding", "knowledge", "intelligence"],
    "automation": ["mechanization", "computerization"],
    "predictive": ["forecasting", "anticipatory", "projective"],
    "analytics": ["analysis", "metrics", "statistics"],
    "article": ["piece", "post", "document", "publication"],
    "examines": ["explores", "investigates", "analyzes"],
    "main": ["primary", "key", "principal", "chief"],
    "advantages": ["benefits", "merits", "strengths"],
    "difficulties": ["challenges", "obstacles", "problems"],
    "prospects": ["possibilities", "opportunities", "potential"],
    "important": ["crucial", "vital", "essential", "critical"],
    "different": ["distinct", "diverse", "varied", "unique"],
    "problem": ["issue", "challenge", "difficulty", "obstacle"],
    "solution": ["answer", "resolution", "remedy", "fix"],
}

# (suffix, synonyms) tried in order when the word is not in SYNONYMS.
SUFFIX_SYNONYMS = [
    ("ing", ["performing", "executing", "conducting", "implementing"]),
    ("ed", ["completed", "finished", "accomplished", "executed"]),
    ("ly", ["quickly", "rapidly", "swiftly", "promptly"]),
]
GENERIC_SYNONYMS = ["alternative", "substitute", "replacement", "equivalent"]

MAX_SYNONYMS = 8
_VALID_SYNONYM = re.compile(r"^[a-zA-Z\s-]+$")

PARAPHRASE_SYSTEM_PROMPT = "You paraphrase text while preserving meaning. Return only valid JSON."
PARAPHRASE_USER_PROMPT = """Paraphrase this text using {mode} mode (synonym level: {level}%):

"{text}"

Instructions: {instructions}

Return JSON:
{{
  "paraphrased": "the paraphrased text",
  "changedWords": [
    {{"original": "word1", "replacement": "synonym1"}},
    {{"original": "word2", "replacement": "synonym2"}}
  ]
}}"""

SYNONYM_SYSTEM_PROMPT = 'You provide context-aware synonyms. Return only valid JSON with a "synonyms" array.'


def mode_instructions(mode: str) -> str:
    return MODE_INSTRUCTIONS.get(mode, MODE_INSTRUCTIONS["standard"])


def lookup_synonyms(word: str) -> List[str]:
    """Table lookup, then partial match, then suffix rules, then generic words."""
    key = re.sub(r"[^\w'-]", "", (word or "").lower())
    if key in SYNONYMS:
        return list(SYNONYMS[key])
    if key:
        for entry, synonyms in SYNONYMS.items():
            if entry in key or key in entry:
                return list(synonyms)
    for suffix, synonyms in SUFFIX_SYNONYMS:
        if key.endswith(suffix):
            return list(synonyms)
    return list(GENERIC_SYNONYMS)


def clean_synonyms(word: str, candidates: Any) -> List[str]:
    """Keeps distinct alphabetic candidates other than the word itself."""
    if not isinstance(candidates, list):
        return []
    cleaned = []
    for candidate in candidates:
        if not isinstance(candidate, str):
            continue
        candidate = candidate.strip()
        if candidate.lower() == word.lower() or len(candidate) <= 1:
            continue
        if not _VALID_SYNONYM.match(candidate) or candidate in cleaned:
            continue
        cleaned.append(candidate)
    return cleaned[:MAX_SYNONYMS]


class Paraphraser:
    def __init__(self, llm: LLMClient, rng: Optional[random.Random] = None):
        self.llm = llm
        self.rng = rng or random.Random()

    def analyze(self, original: str, paraphrased: str, changes: int) -> Dict[str, int]:
        return {
            "word_count_original": word_count(original),
            "word_count_paraphrased": word_count(paraphrased),
            "changes": changes,
            "readability_improvement": min(25, self.rng.randint(5, 19)),
            "similarity_score": max(65, 95 - changes * 2),
        }

    def substitute(self, text: str, mode: str, synonym_level: int) -> ParaphraseResult:
        """Replaces up to synonym_level% of the mode's phrase map."""
        transforms = TRANSFORMS.get(mode, TRANSFORMS["standard"])
        max_changes = int(synonym_level / 100 * len(transforms))

        paraphrased = text
        changed: List[ChangedWord] = []
        for original, replacement in transforms.items():
            if len(changed) >= max_changes:
                break
            regex = re.compile(r"\b" + re.escape(original) + r"\b", re.IGNORECASE)
            match = regex.search(paraphrased)
            if not match:
                continue
            changed.append(ChangedWord(
                original=match.group(0),
                replacement=replacement,
                position=match.start(),
            ))
            paraphrased = regex.sub(lambda _: replacement, paraphrased)

        return ParaphraseResult(
            original=text,
            paraphrased=paraphrased,
            changed_words=changed,
            mode=mode,
            synonym_level=synonym_level,
            language="",
            mode_description=mode_instructions(mode),
            source="mock_generated",
            **self.analyze(text, paraphrased, len(changed)),
        )

    def paraphrase(self, text: str, mode: str = "standard", synonym_level: int = 50,
                   language: str = "en-US") -> ParaphraseResult:
        try:
            raw = self.llm.complete_json(
                PARAPHRASE_SYSTEM_PROMPT,
                PARAPHRASE_USER_PROMPT.format(
                    mode=mode, level=synonym_level, text=text, instructions=mode_instructions(mode)
                ),
                temperature=0.7 + synonym_level / 200,
                max_tokens=2000,
            )
        except LLMUnavailable:
            logger.info("GROQ_API_KEY not set, using mock paraphrasing")
            result = self.substitute(text, mode, synonym_level)
        except LLMError as e:
            logger.warning("Paraphrase fell back to substitution: %s", e)
            result = self.substitute(text, mode, synonym_level)
            result.source = "error_fallback"
            result.error = "AI paraphrase failed, using fallback"
        else:
            paraphrased = raw.get("paraphrased") if isinstance(raw.get("paraphrased"), str) else text
            changed_words = raw.get("changedWords")
            if not isinstance(changed_words, list):
                changed_words = []
            changed = [
                ChangedWord(original=str(c["original"]), replacement=str(c["replacement"]))
                for c in changed_words
                if isinstance(c, dict) and c.get("original") and c.get("replacement")
            ]
            result = ParaphraseResult(
                original=text,
                paraphrased=paraphrased,
                changed_words=changed,
                mode=mode,
                synonym_level=synonym_level,
                language=language,
                source="ai_generated",
                **self.analyze(text, paraphrased, len(changed)),
            )
        result.language = language
        return result

    def synonyms(self, word: str, context: Optional[str] = None, language: str = "en-US") -> SynonymResult:
        context = context or ""
        if context:
            prompt = (f'Provide 6-8 highly relevant synonyms for "{word}" in this context: "{context}".\n\n'
                      'Return JSON: {"synonyms": ["synonym1", "synonym2", ...]}')
        else:
            prompt = (f'Provide 6-8 synonyms for "{word}".\n\n'
                      'Return JSON: {"synonyms": ["synonym1", "synonym2", ...]}')

        try:
            raw = self.llm.complete_json(SYNONYM_SYSTEM_PROMPT, prompt, temperature=0.7, max_tokens=150)
            candidates = raw.get("synonyms") or raw.get("words") or raw.get("alternatives") or []
            synonyms = clean_synonyms(word, candidates)
            source = "ai_generated"
        except LLMUnavailable:
            synonyms, source = [], "mock_generated"
        except LLMError as e:
            logger.warning("Synonym lookup fell back to table: %s", e)
            synonyms, source = [], "error_fallback"

        if not synonyms:
            synonyms = lookup_synonyms(word)
            if source == "ai_generated":
                source = "mock_generated"

        return SynonymResult(
            word=word,
            synonyms=synonyms,
            language=language,
            context=context or None,
            count=len(synonyms),
            source=source,
        )
