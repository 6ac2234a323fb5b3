"""
A small base for fake web services answered through requests_mock.

Handlers are methods marked with `route`.  `install_mocks` registers each of
them with a requests_mock Mocker, and `requests_made` reports what the code
under test asked for.
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple


class FakerException(Exception):
    """Raised by a handler to answer with an error status and message."""
    status_code = 500


class Route(NamedTuple):
    path_regex: str
    http_method: str


def route(path_regex: str, http_method: str = "GET"):
    """
    Mark a method as the handler for `http_method` requests to `path_regex`.

    The handler is called as `handler(match, request, context)`, with the
    re.match of the path (no host or query string), and returns the JSON body.
    """
    def _mark(func):
        func.faker_route = Route(path_regex, http_method.upper())
        return func
    return _mark


class Faker:
    """A fake web service at `host`."""

    def __init__(self, host: str):
        self.host = host
        self.requests_mocker = None

    def _routes(self):
        seen = set()
        for klass in type(self).__mro__:
            for name, func in vars(klass).items():
                spec = getattr(func, "faker_route", None)
                if spec is not None and name not in seen:
                    seen.add(name)
                    yield spec, getattr(self, name)

    @staticmethod
    def _responder(path_regex: str, handler) -> Callable:
        def respond(request, context):
            try:
                return handler(re.match(path_regex, request.path), request, context)
            except FakerException as exc:
                context.status_code = exc.status_code
                return {"message": str(exc)}
        return respond

    def install_mocks(self, requests_mocker) -> None:
        self.requests_mocker = requests_mocker
        for spec, handler in self._routes():
            requests_mocker.register_uri(
                spec.http_method,
                re.compile(fr"^{self.host}{spec.path_regex}(\?.*)?$"),
                json=self._responder(spec.path_regex, handler),
            )

    def requests_made(
        self,
        path_regex: str | None = None,
        method: str | None = None,
    ) -> list[tuple[str, str]]:
        """
        The (path?query, method) of each request to this host, in order.

        Optionally only those whose path matches `path_regex`, or whose
        method is `method`.
        """
        assert self.requests_mocker is not None
        made = []
        for req in self.requests_mocker.request_history:
            if f"{req.scheme}://{req.hostname}" != self.host:
                continue
            if method and req.method != method:
                continue
            if path_regex and not re.search(path_regex, req.path):
                continue
            made.append((req.path + (f"?{req.query}" if req.query else ""), req.method))
        return made

    def assert_readonly(self) -> None:
        """Nothing but GET requests were made."""
        writes = [made for made in self.requests_made() if made[1] != "GET"]
        assert writes == [], f"Found writing requests: {writes}"
