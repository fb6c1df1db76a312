"""Process-wide registry snapshot, swapped wholesale on refresh."""
import threading
import time
from pathlib import Path

from skillrouter.logging_utils import get_logger
from skillrouter.skills.loader import Registry, load_registry

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400.0


class SkillCatalog:
    """Holds the current Registry for a skills directory.

    The registry itself is never mutated: refresh() loads a new one and replaces
    the reference. A failed refresh leaves the previous snapshot in place.
    """

    def __init__(self, source_path: Path, max_age_days: float = 7.0, clock=time.monotonic):
        self.source_path = Path(source_path)
        self.max_age_seconds = max_age_days * SECONDS_PER_DAY
        self._clock = clock
        self._lock = threading.Lock()
        self._registry: Registry | None = None
        self._loaded_at: float | None = None

    def current(self) -> Registry:
        """Return the snapshot, loading it on first use."""
        registry = self._registry
        if registry is None:
            with self._lock:
                # another thread may have loaded it while this one waited
                if self._registry is None:
                    self._swap(load_registry(self.source_path))
                return self._registry
        if self.is_stale():
            logger.warning(
                "skill_registry_stale",
                source=str(self.source_path),
                age_days=round(self.age_seconds() / SECONDS_PER_DAY, 2),
            )
        return registry

    def refresh(self) -> Registry:
        """Load the directory again and swap the new snapshot in."""
        with self._lock:
            registry = load_registry(self.source_path)
            previous = self._swap(registry)
        if previous is not None:
            logger.info(
                "skill_registry_refreshed",
                source=str(self.source_path),
                added=sorted(registry.ids() - previous.ids()),
                removed=sorted(previous.ids() - registry.ids()),
            )
        return registry

    def _swap(self, registry: Registry) -> Registry | None:
        """Replace the snapshot; caller holds the lock. Returns the previous one."""
        previous = self._registry
        self._registry = registry
        self._loaded_at = self._clock()
        return previous

    def age_seconds(self) -> float:
        if self._loaded_at is None:
            return 0.0
        return self._clock() - self._loaded_at

    def is_stale(self) -> bool:
        return self._loaded_at is not None and self.age_seconds() > self.max_age_seconds
