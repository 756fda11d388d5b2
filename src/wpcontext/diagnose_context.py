"""
Diagnose the context a WordPress request would be classified with.

Reads environment facts from a JSON file, stdin or the config directory,
optionally replays lifecycle hooks and forced contexts, and prints the
resulting flags as JSON or as a Rich table.
"""

import argparse
import json
import sys
from typing import Any, Optional

from wpcontext.config_loader import build_environment, load_environment_facts
from wpcontext.contexts import ALL_CONTEXTS
from wpcontext.environment import StaticScreen
from wpcontext.errors import InvalidContextError, build_error, error_lines
from wpcontext.hooks import HookRegistry
from wpcontext.logging_config import generate_request_id, set_request_id, setup_logging
from wpcontext.wp_context import WpContext

LIFECYCLE_HOOKS = (
    "login_init",
    "rest_api_init",
    "activate_header",
    "template_redirect",
    "current_screen",
)


def _fail(error: str, details: str, hint: Optional[str] = None) -> None:
    payload = build_error(error, details=details, hint=hint)
    for line in error_lines(payload):
        print(line, file=sys.stderr)
    print(json.dumps(payload, indent=2), file=sys.stderr)
    sys.exit(2)


def _parse_overrides(pairs: Optional[list[str]]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            _fail("Invalid --set value.", details=pair, hint="Use --set key=value.")
        overrides[key.strip()] = value.strip()
    return overrides


def diagnose(
    facts: dict[str, Any],
    *,
    fire: Optional[list[str]] = None,
    admin_screen: bool = True,
    force: Optional[str] = None,
    with_cli: bool = False,
    strict: Optional[bool] = None,
) -> WpContext:
    """Determine a context from `facts`, then apply hooks and overrides in order."""
    environment = build_environment(facts, strict=strict)
    hooks = HookRegistry()
    context = WpContext.determine(environment, hooks)

    for hook in fire or []:
        if hook == "current_screen":
            hooks.do_action(hook, StaticScreen(admin=admin_screen))
        else:
            hooks.do_action(hook)

    if force:
        context.force(force)
    if with_cli:
        context.with_cli()

    return context


def main() -> None:
    parser = argparse.ArgumentParser(description="Diagnose the WordPress request context.")
    parser.add_argument("input_file", nargs="?", help="JSON file with environment facts")
    parser.add_argument(
        "--set",
        action="append",
        dest="overrides",
        metavar="FACT=VALUE",
        help="Override a single environment fact (repeatable)",
    )
    parser.add_argument(
        "--fire",
        action="append",
        choices=LIFECYCLE_HOOKS,
        help="Fire a lifecycle hook after detection (repeatable, in order)",
    )
    parser.add_argument(
        "--admin-screen",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Whether the screen passed to current_screen is an admin screen",
    )
    parser.add_argument(
        "--force",
        type=str,
        help=f"Force a context. Options: {', '.join(c.value for c in ALL_CONTEXTS)}",
    )
    parser.add_argument("--with-cli", action="store_true", help="Add the WP-CLI flag")
    parser.add_argument("--tui", action="store_true", help="Render a Rich table instead of JSON")
    parser.add_argument(
        "--strict", action="store_true", default=None, help="Reject unknown or missing config"
    )
    parser.add_argument("--log-level", default="WARNING", help="Console log level")

    args = parser.parse_args()
    setup_logging(console_level=args.log_level)
    set_request_id(generate_request_id())

    try:
        if args.input_file:
            facts = load_environment_facts(args.input_file, strict=args.strict)
        else:
            piped = "" if sys.stdin.isatty() else sys.stdin.read()
            if piped.strip():
                facts = json.loads(piped)
            else:
                facts = load_environment_facts(strict=args.strict)
    except (OSError, ValueError) as exc:
        _fail("Could not load environment facts.", details=str(exc))

    if not isinstance(facts, dict):
        _fail("Invalid environment facts.", details="Expected a JSON object.")
    facts = {**facts, **_parse_overrides(args.overrides)}

    try:
        context = diagnose(
            facts,
            fire=args.fire,
            admin_screen=args.admin_screen,
            force=args.force,
            with_cli=args.with_cli,
            strict=args.strict,
        )
    except InvalidContextError as exc:
        _fail(
            "Invalid context.",
            details=str(exc),
            hint=f"Use one of: {', '.join(c.value for c in ALL_CONTEXTS)}",
        )
    except ValueError as exc:
        _fail("Invalid environment facts.", details=str(exc))

    if args.tui:
        from wpcontext.tui_renderer import ContextRenderer

        ContextRenderer(context.to_dict(), pending_hooks=context.pending_hooks).render()
        return

    print(context.to_json(indent=2))


if __name__ == "__main__":
    main()
