"""Errors raised while loading skill documents."""
from pathlib import Path


class SkillRouterError(Exception):
    """Base class for skill-router errors."""


class NotFoundError(SkillRouterError):
    """The skills source directory does not exist."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Skills directory not found: {self.path}")


class ParseError(SkillRouterError):
    """A skill document has no usable front matter or violates a registry invariant."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
