import threading
import time
from pathlib import Path

import pytest
from structlog.testing import capture_logs

import skillrouter.skills.catalog as catalog_module
from skillrouter.skills import ParseError, SkillCatalog


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_current_loads_lazily_and_reuses_snapshot(skills_dir: Path) -> None:
    catalog = SkillCatalog(skills_dir)
    first = catalog.current()
    assert "get-crypto-price" in first
    assert catalog.current() is first


def test_refresh_swaps_in_new_snapshot(skills_dir: Path, make_skill) -> None:
    catalog = SkillCatalog(skills_dir)
    old = catalog.current()
    make_skill(skills_dir, "media/generate-qr-code.md", "name: generate-qr-code\ndescription: Make a QR code.")

    new = catalog.refresh()

    assert new is not old
    assert "generate-qr-code" in new
    assert "generate-qr-code" not in old
    assert catalog.current() is new


def test_failed_refresh_keeps_previous_snapshot(skills_dir: Path, make_skill) -> None:
    catalog = SkillCatalog(skills_dir)
    old = catalog.current()
    make_skill(skills_dir, "broken.md", "description: no name")

    with pytest.raises(ParseError):
        catalog.refresh()

    assert catalog.current() is old


def test_staleness_follows_max_age(skills_dir: Path) -> None:
    clock = FakeClock()
    catalog = SkillCatalog(skills_dir, max_age_days=7, clock=clock)
    assert not catalog.is_stale()

    catalog.current()
    clock.now += 6 * 86400
    assert not catalog.is_stale()
    clock.now += 2 * 86400
    assert catalog.is_stale()

    # stale snapshots are still served until someone refreshes
    assert "get-crypto-price" in catalog.current()
    catalog.refresh()
    assert not catalog.is_stale()


def test_stale_snapshot_logs_warning(skills_dir: Path) -> None:
    clock = FakeClock()
    catalog = SkillCatalog(skills_dir, max_age_days=7, clock=clock)
    catalog.current()

    with capture_logs() as fresh_logs:
        catalog.current()
    assert not [e for e in fresh_logs if e["event"] == "skill_registry_stale"]

    clock.now += 8 * 86400
    with capture_logs() as stale_logs:
        catalog.current()
    stale = [e for e in stale_logs if e["event"] == "skill_registry_stale"]
    assert len(stale) == 1
    assert stale[0]["log_level"] == "warning"
    assert stale[0]["age_days"] == 8.0


def test_concurrent_first_use_loads_once(skills_dir: Path, monkeypatch) -> None:
    calls = []
    real_load = catalog_module.load_registry

    def slow_load(path):
        calls.append(path)
        time.sleep(0.05)
        return real_load(path)

    monkeypatch.setattr(catalog_module, "load_registry", slow_load)
    catalog = SkillCatalog(skills_dir)
    barrier = threading.Barrier(4)
    results = []

    def worker() -> None:
        barrier.wait()
        results.append(catalog.current())

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(results) == 4
    assert all(r is results[0] for r in results)
