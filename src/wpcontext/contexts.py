"""
Request Contexts

The closed set of tags a WordPress request can be classified with.
"""

from enum import Enum


class Context(str, Enum):
    """A single classification flag for the current request."""

    AJAX = "ajax"
    BACKOFFICE = "backoffice"
    CLI = "wpcli"
    CORE = "core"
    CRON = "cron"
    FRONTOFFICE = "frontoffice"
    INSTALLING = "installing"
    LOGIN = "login"
    REST = "rest"
    XML_RPC = "xml-rpc"
    WP_ACTIVATE = "wp-activate"

    def __str__(self) -> str:
        return self.value


ALL_CONTEXTS: tuple[Context, ...] = tuple(Context)

# Forcing any of these does not imply WordPress is loaded.
NON_CORE_CONTEXTS: frozenset[Context] = frozenset(
    {Context.INSTALLING, Context.CLI, Context.CORE}
)
