"""Match a user request to one skill: exact id/alias, then word overlap, then category."""
import re
from dataclasses import dataclass
from enum import Enum

from skillrouter.skills.loader import Category, Registry, SkillRecord

DEFAULT_SEMANTIC_THRESHOLD = 0.5
CATEGORY_CONFIDENCE = 0.25

STOPWORDS = frozenset(
    """
    a about all an and any are as at be by can could do does for from get give have how i
    if in into is it its me my need of on or please show so some tell that the this to up
    us using want what whats when where which who why will with would you your
    """.split()
)


class MatchTier(str, Enum):
    EXACT = "exact"
    SEMANTIC = "semantic"
    CATEGORY = "category"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    matched_id: str | None
    tier: MatchTier
    confidence: float = 0.0

    @property
    def matched(self) -> bool:
        return self.matched_id is not None


NO_MATCH = MatchResult(None, MatchTier.NONE, 0.0)


def _normalize(text: str) -> str:
    """Lowercase, treat - and _ as spaces, collapse whitespace, drop surrounding punctuation."""
    text = (text or "").lower().replace("-", " ").replace("_", " ")
    return " ".join(text.split()).strip(" .,;:!?\"'")


def _stem(word: str) -> str:
    if len(word) > 4 and word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _tokenize(text: str) -> set[str]:
    """Normalize and tokenize into meaningful words (lowercase, alphanumeric, no stopwords)."""
    words = re.findall(r"[a-z0-9]+", _normalize(text))
    return {_stem(w) for w in words if len(w) > 1 and w not in STOPWORDS}


def _skill_tokens(skill: SkillRecord) -> set[str]:
    tokens = _tokenize(skill.id) | _tokenize(skill.description)
    for alias in skill.aliases:
        tokens |= _tokenize(alias)
    return tokens


def _exact(request: str, skills: list[SkillRecord]) -> SkillRecord | None:
    wanted = _normalize(request)
    if not wanted:
        return None
    for skill in skills:
        if _normalize(skill.id) == wanted:
            return skill
        if any(_normalize(alias) == wanted for alias in skill.aliases):
            return skill
    return None


def _semantic(
    request_tokens: set[str], skills: list[SkillRecord], threshold: float
) -> tuple[SkillRecord, float] | None:
    best: tuple[float, int, SkillRecord] | None = None
    for skill in skills:
        overlap = len(request_tokens & _skill_tokens(skill))
        if not overlap:
            continue
        score = overlap / len(request_tokens)
        if score < threshold:
            continue
        # skills arrive sorted by id, so strict > keeps the smallest id on ties
        if best is None or (score, overlap) > (best[0], best[1]):
            best = (score, overlap, skill)
    if best is None:
        return None
    return best[2], best[0]


def _category(request_tokens: set[str], registry: Registry) -> SkillRecord | None:
    present = registry.categories()
    hits: list[tuple[int, int, Category]] = []
    for order, category in enumerate(Category):
        if category not in present:
            continue
        keywords = set()
        for word in category.keywords:
            keywords |= _tokenize(word)
        count = len(request_tokens & keywords)
        if count:
            hits.append((-count, order, category))
    if not hits:
        return None
    category = min(hits)[2]
    best: SkillRecord | None = None
    best_overlap = -1
    for skill in registry.in_category(category):
        overlap = len(request_tokens & _skill_tokens(skill))
        if overlap > best_overlap:
            best, best_overlap = skill, overlap
    return best


def resolve(
    registry: Registry,
    request: str,
    *,
    semantic_threshold: float = DEFAULT_SEMANTIC_THRESHOLD,
) -> MatchResult:
    """Return the MatchResult for request against registry. Tiers are tried in order and the first hit wins.
    No match is a normal result (tier NONE), never an exception.
    """
    if not registry or not (request or "").strip():
        return NO_MATCH
    skills = [registry[skill_id] for skill_id in sorted(registry)]

    skill = _exact(request, skills)
    if skill is not None:
        return MatchResult(skill.id, MatchTier.EXACT, 1.0)

    request_tokens = _tokenize(request)
    if not request_tokens:
        return NO_MATCH

    found = _semantic(request_tokens, skills, semantic_threshold)
    if found is not None:
        skill, score = found
        return MatchResult(skill.id, MatchTier.SEMANTIC, score)

    skill = _category(request_tokens, registry)
    if skill is not None:
        return MatchResult(skill.id, MatchTier.CATEGORY, CATEGORY_CONFIDENCE)

    return NO_MATCH
