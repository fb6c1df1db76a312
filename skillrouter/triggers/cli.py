"""CLI trigger: resolve a request, list the registry, or validate the skill documents."""
import sys

from skillrouter.config import SKILLS_DIR
from skillrouter.gateway import handle_message
from skillrouter.skills import SkillRouterError, load_registry


def run_resolve(args: list[str]) -> int:
    """Message from args or stdin, then print the rendered reply."""
    if args:
        message = " ".join(args)
    else:
        print("Enter your request:", file=sys.stderr)
        message = (sys.stdin.readline() or "").strip()
    if not message:
        print("Usage: python main.py resolve \"your request\" or echo \"request\" | python main.py resolve", file=sys.stderr)
        return 1
    reply, skill_id = handle_message(message, trigger="cli")
    if skill_id:
        print(f"[Skill matched: {skill_id}]", file=sys.stderr)
    print(reply)
    return 0


def run_list() -> int:
    registry = load_registry(SKILLS_DIR)
    for skill_id in sorted(registry):
        skill = registry[skill_id]
        print(f"{skill.id}\t{skill.category.value}\t{skill.description}")
    return 0


def run_check() -> int:
    """Load every document once so front matter problems surface before serving requests."""
    try:
        registry = load_registry(SKILLS_DIR)
    except SkillRouterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"OK: {len(registry)} skills in {SKILLS_DIR}")
    return 0
