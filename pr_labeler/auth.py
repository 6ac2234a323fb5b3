"""
Create authenticated sessions for access to GitHub.
"""

from typing import Optional

import requests
from urlobject import URLObject

from pr_labeler import settings


class BaseUrlSession(requests.Session):
    """
    A requests Session class that applies a base URL to the requested URL.
    """
    def __init__(self, base_url):
        super().__init__()
        self.base_url = URLObject(base_url)

    def request(self, method, url, data=None, headers=None, **kwargs):
        return super().request(
            method=method,
            url=self.base_url.relative(url),
            data=data,
            headers=headers,
            **kwargs
        )


def get_github_session(token: Optional[str] = None):
    """
    Get the GitHub session to use.

    `token` defaults to the GITHUB_PERSONAL_TOKEN setting.
    """
    token = token or settings.GITHUB_PERSONAL_TOKEN
    session = BaseUrlSession(base_url="https://api.github.com")
    session.headers["Authorization"] = f"token {token}"
    session.headers["Accept"] = "application/vnd.github+json"
    session.trust_env = False   # prevent reading the local .netrc
    return session
