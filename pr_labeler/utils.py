"""
Helpers for talking to GitHub, caching, and error reporting.
"""

import functools
from time import sleep as retry_sleep   # so that we can patch it for tests.

import sentry_sdk
from urlobject import URLObject

from pr_labeler import logger


class RequestFailed(Exception):
    """A GitHub API request didn't succeed."""


def log_check_response(response, raise_for_status=True):
    """
    Log a request and its response at debug level, and check the status.

    Raises RequestFailed, with the method, URL and response body, if the
    status is an error and `raise_for_status` is true.
    """
    req = response.request
    logger.debug(f"Request: {req.method} {req.url}: {req.body!r}")
    logger.debug(f"Response: {response.status_code} {response.reason!r} for {response.url}: {response.content!r}")
    if raise_for_status and not response.ok:
        try:
            response.raise_for_status()
        except Exception as exc:
            raise RequestFailed(
                f"HTTP request failed: {req.method} {req.url}. Response body: {response.content}"
            ) from exc


def retry_get(session, url, tries=10, **kwargs):
    """
    GET a URL, retrying a few times while it answers 404.

    Right after a pull request is pushed, GitHub can briefly answer 404 for
    it or its files.  The last response is returned whatever its status.
    """
    for _ in range(tries - 1):
        resp = session.get(url, **kwargs)
        if resp.status_code != 404:
            return resp
        retry_sleep(.5)
    return session.get(url, **kwargs)


def paginated_get(url, session, per_page=100, **kwargs):
    """
    Yield every item from a paginated GitHub list endpoint.

    Pages are followed through the "next" URL in the Link header.
    """
    next_url = URLObject(url).set_query_param('per_page', str(per_page))
    while next_url:
        resp = retry_get(session, next_url, **kwargs)
        log_check_response(resp)
        yield from resp.json()
        next_url = resp.links.get("next", {}).get("url")


# Every function wrapped by @memoize, for clear_memoized_values.
_memoized_functions = []

def memoize(func):
    """Cache the value returned by a function call forever."""
    func = functools.lru_cache()(func)
    _memoized_functions.append(func)
    return func

def clear_memoized_values():
    """Forget the values saved by @memoize, so tests don't share them."""
    for func in _memoized_functions:
        func.cache_clear()


def sentry_extra_context(data_dict):
    """Attach the keys and values of data_dict to Sentry error reports."""
    scope = sentry_sdk.get_current_scope()
    for key, value in data_dict.items():
        scope.set_extra(key, value)
