"""Automatically run by pytest to set up test infrastructure."""

import pytest
import requests_mock

import pr_labeler.utils

from . import settings as test_settings
from .fake_github import FakeGitHub


@pytest.fixture
def requests_mocker():
    """Make requests_mock available as a fixture."""
    mocker = requests_mock.Mocker(real_http=False, case_sensitive=True)
    mocker.start()
    try:
        yield mocker
    finally:
        mocker.stop()


@pytest.fixture(autouse=True)
def settings_for_tests(mocker):
    for name, value in vars(test_settings).items():
        if name.isupper():
            mocker.patch(f"pr_labeler.settings.{name}", value)


@pytest.fixture
def fake_github(mocker, requests_mocker):
    the_fake_github = FakeGitHub()
    the_fake_github.install_mocks(requests_mocker)
    # Make the retry sleep a no-op so it won't slow the tests.
    mocker.patch("pr_labeler.utils.retry_sleep", lambda x: None)
    return the_fake_github


@pytest.fixture(autouse=True)
def reset_all_memoized_functions():
    """Clears the values cached by @memoize before each test. Applied automatically."""
    pr_labeler.utils.clear_memoized_values()
