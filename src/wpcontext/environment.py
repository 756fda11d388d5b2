"""
Static Host Environment

A WordPress environment described by plain facts. Used as the bootstrap shim
in tests and by the diagnostic CLI, where no real WordPress is running.
"""

from dataclasses import dataclass, field, fields
from typing import Any

DEFAULT_SITE_URL = "https://example.com"


@dataclass(frozen=True)
class StaticEnvironment:
    """Implements IHostEnvironment from pre-computed values."""

    # Constants / global state
    core_loaded: bool = False
    installing: bool = False
    xml_rpc: bool = False
    cli: bool = False
    ajax: bool = False
    admin: bool = False
    cron: bool = False
    multisite: bool = False
    rest_flagged: bool = False

    # Options and URLs
    permalinks: str = ""
    url: str = "/"
    rest_base_url: str = f"{DEFAULT_SITE_URL}/wp-json/"
    login_page_url: str = f"{DEFAULT_SITE_URL}/wp-login.php"
    network_url: str = f"{DEFAULT_SITE_URL}/"
    pagenow: str = ""

    # Superglobals
    query: dict[str, Any] = field(default_factory=dict)
    request: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def fact_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    def is_core_loaded(self) -> bool:
        return self.core_loaded

    def is_installing(self) -> bool:
        return self.installing

    def is_xml_rpc_request(self) -> bool:
        return self.xml_rpc

    def is_cli(self) -> bool:
        return self.cli

    def doing_ajax(self) -> bool:
        return self.ajax

    def is_admin(self) -> bool:
        return self.admin

    def doing_cron(self) -> bool:
        return self.cron

    def is_multisite(self) -> bool:
        return self.multisite

    def is_rest_request_flagged(self) -> bool:
        return self.rest_flagged

    def permalink_structure(self) -> str:
        return self.permalinks

    def current_url(self) -> str:
        return self.url

    def rest_url(self) -> str:
        return self.rest_base_url

    def login_url(self) -> str:
        return self.login_page_url

    def network_site_url(self, path: str = "") -> str:
        return f"{self.network_url.rstrip('/')}/{path.lstrip('/')}"

    def page_now(self) -> str:
        return self.pagenow

    def query_param(self, name: str) -> Any:
        return self.query.get(name)

    def request_param(self, name: str) -> Any:
        # $_REQUEST includes $_GET
        if name in self.request:
            return self.request[name]
        return self.query.get(name)


@dataclass(frozen=True)
class StaticScreen:
    """Implements IScreen for firing `current_screen` without WordPress."""

    admin: bool = True

    def in_admin(self) -> bool:
        return self.admin
