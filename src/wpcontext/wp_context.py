"""
WordPress Request Context

Determines what kind of request is executing (admin, REST, cron, CLI, login,
AJAX, front-office, multisite activation, installation, XML-RPC) and exposes
it as a queryable object.

Detection happens once, as early as possible. Signals that WordPress only
confirms on later hooks (login, REST, front-office, admin screen, activation)
are guessed from the request path first and corrected when those hooks fire.
"""

import json
import logging
from typing import Any, Callable, Optional, Union, cast

from wpcontext.contexts import ALL_CONTEXTS, NON_CORE_CONTEXTS, Context
from wpcontext.detection import is_login_request, is_rest_request, is_wp_activate_request
from wpcontext.errors import InvalidContextError
from wpcontext.hooks import LOWEST_PRIORITY, HookRegistry
from wpcontext.interfaces import ContextData, IHostEnvironment, IScreen
from wpcontext.logging_config import audit_log

logger = logging.getLogger(__name__)

ContextLike = Union[Context, str]


def _blank() -> dict[Context, bool]:
    return dict.fromkeys(ALL_CONTEXTS, False)


def _as_context(value: Any) -> Optional[Context]:
    try:
        return Context(value)
    except (TypeError, ValueError):
        return None


class WpContext:
    """Classification of the current WordPress request."""

    AJAX = Context.AJAX
    BACKOFFICE = Context.BACKOFFICE
    CLI = Context.CLI
    CORE = Context.CORE
    CRON = Context.CRON
    FRONTOFFICE = Context.FRONTOFFICE
    INSTALLING = Context.INSTALLING
    LOGIN = Context.LOGIN
    REST = Context.REST
    XML_RPC = Context.XML_RPC
    WP_ACTIVATE = Context.WP_ACTIVATE

    def __init__(self, data: Optional[dict[ContextLike, bool]] = None):
        self._data = _blank()
        for key, value in (data or {}).items():
            context = _as_context(key)
            if context is None:
                raise InvalidContextError(key)
            self._data[context] = bool(value)
        self._hooks: Optional[HookRegistry] = None
        self._action_callbacks: dict[str, Callable[..., None]] = {}

    @classmethod
    def new(cls) -> "WpContext":
        """An instance with every context false, for manual assembly via `force`."""
        return cls()

    @classmethod
    def determine(
        cls, environment: IHostEnvironment, hooks: HookRegistry
    ) -> "WpContext":
        """
        Classify the current request from the host environment.

        Late corrections are registered on `hooks`, which should live no longer
        than the request being classified.
        """
        installing = bool(environment.is_installing())
        xml_rpc = bool(environment.is_xml_rpc_request())
        is_core = bool(environment.is_core_loaded())
        is_cli = bool(environment.is_cli())
        not_installing = is_core and not installing
        is_ajax = not_installing and bool(environment.doing_ajax())
        is_admin = not_installing and bool(environment.is_admin()) and not is_ajax
        is_cron = not_installing and not (is_ajax or is_admin) and bool(environment.doing_cron())
        is_wp_activate = (
            installing
            and bool(environment.is_multisite())
            and is_wp_activate_request(environment)
        )

        undetermined = not_installing and not (
            is_admin or is_cron or is_cli or xml_rpc or is_ajax
        )

        is_rest = undetermined and is_rest_request(environment)
        is_login = undetermined and not is_rest and is_login_request(environment)

        # When nothing else matches, assume a front-office request.
        is_front = undetermined and not is_rest and not is_login

        # While installing, only INSTALLING is set, not even CORE: most of
        # WordPress does not behave as expected at that point.
        instance = cls(
            {
                Context.AJAX: is_ajax,
                Context.BACKOFFICE: is_admin,
                Context.CLI: is_cli,
                Context.CORE: (is_core or xml_rpc) and (not installing or is_wp_activate),
                Context.CRON: is_cron,
                Context.FRONTOFFICE: is_front,
                Context.INSTALLING: installing and not is_wp_activate,
                Context.LOGIN: is_login,
                Context.REST: is_rest,
                Context.XML_RPC: xml_rpc and not installing,
                Context.WP_ACTIVATE: is_wp_activate,
            }
        )

        instance._add_action_hooks(hooks)
        logger.debug("Context determined: %r", instance)

        return instance

    def force(self, context: ContextLike) -> "WpContext":
        """
        Replace the classification with `context`.

        Any pending late correction is dropped so the forced value sticks.

        Raises:
            InvalidContextError: `context` is not one of the known contexts.
        """
        target = _as_context(context)
        if target is None:
            raise InvalidContextError(context)

        self._apply(target)
        logger.info("Context forced to %s", target)
        audit_log("Context forced", context=target.value)

        return self

    def _apply(self, target: Context) -> None:
        self._remove_action_hooks()

        data = _blank()
        data[target] = True
        if target not in NON_CORE_CONTEXTS:
            data[Context.CORE] = True

        self._data = data

    def with_cli(self) -> "WpContext":
        self._data[Context.CLI] = True
        return self

    def is_any(self, context: ContextLike, *contexts: ContextLike) -> bool:
        """True if any of the given contexts is set. Unknown names are false."""
        for candidate in (context, *contexts):
            target = _as_context(candidate)
            if target is not None and self._data[target]:
                return True
        return False

    def is_core(self) -> bool:
        return self.is_any(Context.CORE)

    def is_frontoffice(self) -> bool:
        return self.is_any(Context.FRONTOFFICE)

    def is_backoffice(self) -> bool:
        return self.is_any(Context.BACKOFFICE)

    def is_ajax(self) -> bool:
        return self.is_any(Context.AJAX)

    def is_login(self) -> bool:
        return self.is_any(Context.LOGIN)

    def is_rest(self) -> bool:
        return self.is_any(Context.REST)

    def is_cron(self) -> bool:
        return self.is_any(Context.CRON)

    def is_wp_cli(self) -> bool:
        return self.is_any(Context.CLI)

    def is_xml_rpc(self) -> bool:
        return self.is_any(Context.XML_RPC)

    def is_installing(self) -> bool:
        return self.is_any(Context.INSTALLING)

    def is_wp_activate(self) -> bool:
        return self.is_any(Context.WP_ACTIVATE)

    def to_dict(self) -> ContextData:
        return cast(ContextData, {context.value: value for context, value in self._data.items()})

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @property
    def pending_hooks(self) -> tuple[str, ...]:
        """Names of the hooks that can still correct this classification."""
        return tuple(self._action_callbacks)

    def __repr__(self) -> str:
        active = ", ".join(context.value for context, value in self._data.items() if value)
        return f"WpContext({active or 'none'})"

    def _add_action_hooks(self, hooks: HookRegistry) -> None:
        """
        Early detection is a best guess for login, REST and front-office.
        When the hook WordPress uses to confirm one of them fires, trust it
        over whatever was determined before.
        """

        def on_current_screen(screen: IScreen) -> None:
            if screen.in_admin():
                self._reset_and_force(Context.BACKOFFICE)

        self._hooks = hooks
        self._action_callbacks = {
            "login_init": lambda *_: self._reset_and_force(Context.LOGIN),
            "rest_api_init": lambda *_: self._reset_and_force(Context.REST),
            "activate_header": lambda *_: self._reset_and_force(Context.WP_ACTIVATE),
            "template_redirect": lambda *_: self._reset_and_force(Context.FRONTOFFICE),
            "current_screen": on_current_screen,
        }

        for action, callback in self._action_callbacks.items():
            hooks.add_action(action, callback, LOWEST_PRIORITY)

    def _remove_action_hooks(self) -> None:
        if self._hooks is not None:
            for action, callback in self._action_callbacks.items():
                self._hooks.remove_action(action, callback, LOWEST_PRIORITY)
        self._action_callbacks = {}

    def _reset_and_force(self, context: Context) -> None:
        cli = self.is_wp_cli()
        self._apply(context)
        logger.debug("Context corrected to %s by lifecycle hook", context)
        if cli:
            self.with_cli()
