"""Gateway: all messages go through here; resolve a skill and render the reply."""
import uuid

from skillrouter.logging_utils import clear_trace_id, get_logger, log_skill_resolved, set_trace_id
from skillrouter.skills import resolve_skill
from skillrouter.skills.response import render_match

logger = get_logger(__name__)


def handle_message(message: str, *, trigger: str = "unknown") -> tuple[str, str | None]:
    """Handle an incoming message: resolve it against the skill registry and render the reply.
    Returns (reply_text, skill_id or None).
    """
    set_trace_id(str(uuid.uuid4()))
    try:
        logger.debug("message_received", trigger=trigger)
        match, skill = resolve_skill(message)
        log_skill_resolved(
            logger,
            request=message,
            skill_id=match.matched_id,
            tier=match.tier.value,
            confidence=match.confidence,
        )
        return render_match(match, skill), match.matched_id
    finally:
        clear_trace_id()
