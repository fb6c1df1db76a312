"""Entry: resolve requests via CLI or Telegram trigger."""
import sys

from skillrouter.config import LOG_LEVEL, validate_for_resolver, validate_for_telegram
from skillrouter.logging_utils import configure_logging
from skillrouter.skills import SkillRouterError

USAGE = 'Usage: python main.py resolve "request"  |  list  |  check  |  telegram'


def main() -> None:
    configure_logging(LOG_LEVEL)
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    cmd = sys.argv[1].lower()
    validate_for_resolver()
    if cmd == "resolve":
        from skillrouter.triggers.cli import run_resolve
        code = _guarded(run_resolve, sys.argv[2:])
    elif cmd == "list":
        from skillrouter.triggers.cli import run_list
        code = _guarded(run_list)
    elif cmd == "check":
        from skillrouter.triggers.cli import run_check
        code = run_check()
    elif cmd == "telegram":
        validate_for_telegram()
        from skillrouter.triggers.telegram import run_telegram
        run_telegram()
        code = 0
    else:
        print("Unknown command. Use: resolve | list | check | telegram", file=sys.stderr)
        code = 1
    sys.exit(code)


def _guarded(fn, *args) -> int:
    """Skill documents that fail to load are a configuration error: report once and exit 1."""
    try:
        return fn(*args)
    except SkillRouterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    main()
