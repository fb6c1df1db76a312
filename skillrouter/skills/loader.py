"""Load skill files from a directory: YAML frontmatter + Markdown body."""
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType

import yaml

from skillrouter.logging_utils import get_logger, log_registry_loaded
from skillrouter.skills.errors import NotFoundError, ParseError

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "description")

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n(?P<body>.*))?\Z",
    re.DOTALL | re.MULTILINE,
)


class Category(str, Enum):
    """Closed set of skill categories, each with the request words that point at it."""

    CRYPTO = "crypto"
    STORAGE = "storage"
    MEDIA = "media"
    WEB = "web"
    DOCUMENTS = "documents"
    MESSAGING = "messaging"
    GENERAL = "general"

    @property
    def keywords(self) -> frozenset[str]:
        return CATEGORY_KEYWORDS[self]


# Plain words; the matcher tokenizes them the same way it tokenizes requests.
CATEGORY_KEYWORDS: dict[Category, frozenset[str]] = {
    Category.CRYPTO: frozenset(
        {"crypto", "bitcoin", "btc", "ethereum", "eth", "wallet", "coin", "token", "blockchain", "solana"}
    ),
    Category.STORAGE: frozenset({"storage", "upload", "ipfs", "file", "host", "pin", "bucket"}),
    Category.MEDIA: frozenset({"media", "image", "qr", "photo", "picture", "video", "audio"}),
    Category.WEB: frozenset({"web", "scrape", "scraping", "page", "website", "url", "search", "crawl"}),
    Category.DOCUMENTS: frozenset({"pdf", "docx", "spreadsheet", "markdown"}),
    Category.MESSAGING: frozenset({"telegram", "discord", "message", "chat", "bot", "email"}),
    Category.GENERAL: frozenset(),
}


@dataclass(frozen=True)
class SkillRecord:
    """A single skill: frontmatter metadata plus the Markdown body it came with."""

    id: str
    description: str
    category: Category
    aliases: tuple[str, ...] = ()
    body: str = ""
    path: Path | None = None


class Registry(Mapping[str, SkillRecord]):
    """Read-only mapping of skill id to SkillRecord, built once per load."""

    def __init__(self, records: Mapping[str, SkillRecord], source: Path | None = None):
        self._records = MappingProxyType(dict(records))
        self.source = source

    def __getitem__(self, skill_id: str) -> SkillRecord:
        return self._records[skill_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def ids(self) -> frozenset[str]:
        return frozenset(self._records)

    def in_category(self, category: Category) -> list[SkillRecord]:
        """Records of one category, sorted by id."""
        return sorted(
            (r for r in self._records.values() if r.category is category),
            key=lambda r: r.id,
        )

    def categories(self) -> set[Category]:
        return {r.category for r in self._records.values()}


def _parse_frontmatter_and_body(content: str, path: Path) -> tuple[dict, str]:
    """Split content into frontmatter dict and body. Raises ParseError if there is no valid frontmatter."""
    content = content.lstrip("\ufeff").strip()
    match = _FRONTMATTER_RE.match(content)
    if not match:
        reason = "unterminated front matter" if content.startswith("---") else "missing front matter"
        raise ParseError(path, reason)
    yaml_block = match.group("meta").strip()
    body = (match.group("body") or "").strip()
    try:
        meta = yaml.safe_load(yaml_block)
    except yaml.YAMLError as e:
        logger.warning("skill_document_parse_error", path=str(path), error=str(e))
        raise ParseError(path, f"invalid YAML in front matter: {e}") from e
    if meta is None:
        raise ParseError(path, "empty front matter")
    if not isinstance(meta, dict):
        raise ParseError(path, "front matter must be a mapping")
    return meta, body


def _as_str_list(value) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [str(v).strip() for v in value if str(v).strip()]


def _category_for(meta: dict, path: Path) -> Category:
    raw = meta.get("category")
    if raw is None:
        try:
            return Category(path.parent.name.lower())
        except ValueError:
            return Category.GENERAL
    try:
        return Category(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise ParseError(path, f"unknown category {raw!r} (expected one of: {allowed})") from None


def parse_skill_document(path: Path) -> SkillRecord:
    """Read one skill document and build its SkillRecord."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        logger.warning("skill_file_read_error", path=str(path), error=str(e))
        raise ParseError(path, f"cannot read file: {e}") from e
    meta, body = _parse_frontmatter_and_body(text, path)
    for field in REQUIRED_FIELDS:
        value = meta.get(field)
        if not isinstance(value, (str, int, float)) or not str(value).strip():
            raise ParseError(path, f"missing required front matter field '{field}'")
    aliases = _as_str_list(meta.get("aliases")) + _as_str_list(meta.get("keywords"))
    return SkillRecord(
        id=str(meta["name"]).strip(),
        description=str(meta["description"]).strip(),
        category=_category_for(meta, path),
        aliases=tuple(dict.fromkeys(aliases)),
        body=body,
        path=path,
    )


def _discover_documents(directory: Path) -> list[Path]:
    found = []
    for path in sorted(directory.rglob("*.md")):
        if not path.is_file():
            continue
        relative = path.relative_to(directory)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.name.lower() == "readme.md":
            continue
        found.append(path)
    return found


def load_registry(source_path: Path) -> Registry:
    """Discover *.md files under source_path, parse frontmatter + body, return a Registry.
    Raises NotFoundError if source_path is not a directory and ParseError on the first bad document.
    """
    directory = Path(source_path)
    if not directory.is_dir():
        raise NotFoundError(directory)
    records: dict[str, SkillRecord] = {}
    for path in _discover_documents(directory):
        record = parse_skill_document(path)
        existing = records.get(record.id)
        if existing is not None:
            raise ParseError(path, f"duplicate skill id '{record.id}' (already defined in {existing.path})")
        records[record.id] = record
    registry = Registry(records, source=directory)
    log_registry_loaded(logger, source=str(directory), skill_count=len(registry))
    return registry
