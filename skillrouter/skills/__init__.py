"""Skills: load from YAML-frontmatter Markdown files and resolve user requests to one of them."""
from skillrouter.config import REGISTRY_MAX_AGE_DAYS, SEMANTIC_THRESHOLD, SKILLS_DIR
from skillrouter.skills.catalog import SkillCatalog
from skillrouter.skills.errors import NotFoundError, ParseError, SkillRouterError
from skillrouter.skills.loader import Category, Registry, SkillRecord, load_registry
from skillrouter.skills.matcher import MatchResult, MatchTier, resolve

_catalog: SkillCatalog | None = None


def get_catalog() -> SkillCatalog:
    """Return the process-wide catalog for SKILLS_DIR."""
    global _catalog
    if _catalog is None:
        _catalog = SkillCatalog(SKILLS_DIR, max_age_days=REGISTRY_MAX_AGE_DAYS)
    return _catalog


def resolve_skill(message: str) -> tuple[MatchResult, SkillRecord | None]:
    """Resolve message against the current registry snapshot; the record is None when nothing matched."""
    registry = get_catalog().current()
    result = resolve(registry, message, semantic_threshold=SEMANTIC_THRESHOLD)
    record = registry[result.matched_id] if result.matched else None
    return result, record


__all__ = [
    "Category",
    "MatchResult",
    "MatchTier",
    "NotFoundError",
    "ParseError",
    "Registry",
    "SkillCatalog",
    "SkillRecord",
    "SkillRouterError",
    "get_catalog",
    "load_registry",
    "resolve",
    "resolve_skill",
]
