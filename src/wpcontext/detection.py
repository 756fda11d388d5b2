"""
Request Detection Probes

Early-request heuristics for contexts WordPress only confirms on later hooks.
All of them compare URL paths, so they work before rewrite rules are loaded.
"""

import posixpath
from typing import Any
from urllib.parse import urlsplit

from wpcontext.interfaces import IHostEnvironment

LOGIN_PAGE = "wp-login.php"
ACTIVATE_PAGE = "wp-activate.php"


def is_empty(value: Any) -> bool:
    """PHP `empty()` semantics for request parameters."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def url_path(url: str) -> str:
    return urlsplit(str(url or "")).path


def _slashed(path: str) -> str:
    return path.strip("/") + "/"


def is_rest_request(environment: IHostEnvironment) -> bool:
    if environment.is_rest_request_flagged() or not is_empty(
        environment.query_param("rest_route")
    ):
        return True

    # Without pretty permalinks the REST API is only reachable via `rest_route`.
    if not environment.permalink_structure():
        return False

    # Sub-resources of the REST base still match, e.g. /wp-json/wp/v2/posts.
    current_path = _slashed(url_path(environment.current_url()))
    rest_path = _slashed(url_path(environment.rest_url()))

    return current_path.startswith(rest_path)


def is_page_now(environment: IHostEnvironment, page: str, url: str) -> bool:
    page_now = str(environment.page_now() or "")
    if page_now and posixpath.basename(page_now) == page:
        return True

    current_path = url_path(environment.current_url())
    target_path = url_path(url)

    return current_path.strip("/") == target_path.strip("/")


def is_login_request(environment: IHostEnvironment) -> bool:
    if not is_empty(environment.request_param("interim-login")):
        return True

    return is_page_now(environment, LOGIN_PAGE, environment.login_url())


def is_wp_activate_request(environment: IHostEnvironment) -> bool:
    return is_page_now(environment, ACTIVATE_PAGE, environment.network_site_url(ACTIVATE_PAGE))
