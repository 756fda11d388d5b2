from typing import Any, Protocol, TypedDict

ContextData = TypedDict(
    "ContextData",
    {
        "ajax": bool,
        "backoffice": bool,
        "wpcli": bool,
        "core": bool,
        "cron": bool,
        "frontoffice": bool,
        "installing": bool,
        "login": bool,
        "rest": bool,
        "xml-rpc": bool,
        "wp-activate": bool,
    },
)


class IScreen(Protocol):
    """The admin screen object passed to the `current_screen` hook."""

    def in_admin(self) -> bool: ...


class IHostEnvironment(Protocol):
    """
    Interface for the WordPress host.
    Exposes the read-only facts about the current process/request that the
    classifier needs, so it never reads constants or superglobals directly.
    """

    def is_core_loaded(self) -> bool:
        """True when WordPress is bootstrapped (ABSPATH is defined)."""
        ...

    def is_installing(self) -> bool:
        """True when WP_INSTALLING is defined and truthy."""
        ...

    def is_xml_rpc_request(self) -> bool:
        """True when XMLRPC_REQUEST is defined and truthy."""
        ...

    def is_cli(self) -> bool:
        """True when running under WP-CLI."""
        ...

    def doing_ajax(self) -> bool: ...

    def is_admin(self) -> bool: ...

    def doing_cron(self) -> bool: ...

    def is_multisite(self) -> bool: ...

    def is_rest_request_flagged(self) -> bool:
        """True when REST_REQUEST is defined and truthy."""
        ...

    def permalink_structure(self) -> str: ...

    def current_url(self) -> str:
        """The URL of the current request, as `add_query_arg([])` returns it."""
        ...

    def rest_url(self) -> str: ...

    def login_url(self) -> str: ...

    def network_site_url(self, path: str = "") -> str: ...

    def page_now(self) -> str:
        """The `$pagenow` global, or an empty string when unset."""
        ...

    def query_param(self, name: str) -> Any:
        """A `$_GET` value, or None."""
        ...

    def request_param(self, name: str) -> Any:
        """A `$_REQUEST` value, or None."""
        ...
