"""Reply template: Skill(s) used / Result / Next step."""
from skillrouter.skills.loader import SkillRecord
from skillrouter.skills.matcher import MatchResult

NO_SKILL_FOUND = "No skill found for this request."
GENERAL_HANDLING = "Proceeding with general handling; no skill document applies."


def render_response(skills_used: list[str], result: str, next_step: str) -> str:
    used = ", ".join(skills_used) if skills_used else "none"
    return f"Skill(s) used: {used}\nResult: {result}\nNext step: {next_step}"


def render_match(match: MatchResult, skill: SkillRecord | None) -> str:
    """Reply for one resolution. Unmatched requests state plainly that no skill was found."""
    if not match.matched or skill is None:
        return render_response([], NO_SKILL_FOUND, GENERAL_HANDLING)
    result = f"{skill.description} (matched by {match.tier.value}, confidence {match.confidence:.2f})"
    where = str(skill.path) if skill.path else skill.id
    return render_response([skill.id], result, f"Follow the steps in {where}.")
