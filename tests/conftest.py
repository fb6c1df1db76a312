from pathlib import Path

import pytest


def write_skill(root: Path, relpath: str, front_matter: str, body: str = "Steps go here.\n") -> Path:
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{front_matter.strip()}\n---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """Small registry: two crypto skills, one storage skill, one web skill."""
    root = tmp_path / "skills"
    write_skill(
        root,
        "crypto/check-crypto-address-balance.md",
        """
name: check-crypto-address-balance
description: Check the balance of a crypto wallet address (BTC, ETH) using public block explorers.
aliases:
  - check bitcoin balance
  - wallet balance
""",
    )
    write_skill(
        root,
        "crypto/get-crypto-price.md",
        """
name: get-crypto-price
description: Fetch the current market price of a cryptocurrency.
aliases: [crypto price]
""",
    )
    write_skill(
        root,
        "upload-to-ipfs.md",
        """
name: upload-to-ipfs
description: Upload a file to IPFS and return the gateway URL.
category: storage
keywords: [pin to ipfs]
""",
    )
    write_skill(
        root,
        "web/scrape-web-page.md",
        """
name: scrape-web-page
description: Fetch a web page and extract its readable text and links.
""",
    )
    return root


@pytest.fixture
def make_skill():
    return write_skill


@pytest.fixture
def catalog(skills_dir: Path, monkeypatch):
    """Point the process-wide catalog at the test registry."""
    import skillrouter.skills as skills_pkg
    from skillrouter.skills import SkillCatalog

    cat = SkillCatalog(skills_dir)
    monkeypatch.setattr(skills_pkg, "_catalog", cat)
    return cat
