"""
Reading the inputs of a labeling run in GitHub Actions.

Actions pass each input in an environment variable: ``repo-token`` arrives
as ``INPUT_REPO-TOKEN``.  The pull request to label is in the event payload
file named by ``GITHUB_EVENT_PATH``.
"""

import json
import os
from typing import Mapping, Optional

from pr_labeler import settings
from pr_labeler.errors import InvalidConfigurationError
from pr_labeler.types import PrId

TRUE_VALUES = {"1", "true", "yes", "on", "y"}
FALSE_VALUES = {"", "0", "false", "no", "off", "n"}


def input_envvar(name: str) -> str:
    """The environment variable GitHub Actions uses for the input `name`."""
    return "INPUT_" + name.replace(" ", "_").upper()


def parse_bool_input(name: str, value: Optional[str]) -> bool:
    """Interpret a boolean-ish input.  Missing or empty means False."""
    if value is None:
        return False
    text = value.strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise InvalidConfigurationError(f"Input {name!r} should be true or false, not {value!r}")


def parse_truncate_input(value: Optional[str]) -> int:
    """
    Interpret the truncate input.

    Missing means the hard limit, and nothing above the hard limit is allowed.
    """
    if value is None or not value.strip():
        return settings.TRUNCATE_HARD_LIMIT
    try:
        truncate = int(value.strip())
    except ValueError as exc:
        raise InvalidConfigurationError(f"Truncate value must be a positive integer, not {value!r}.") from exc
    truncate = min(truncate, settings.TRUNCATE_HARD_LIMIT)
    if truncate <= 0:
        raise InvalidConfigurationError("Truncate value must be a positive integer.")
    return truncate


def pr_from_event(event: Mapping, repository: Optional[str] = None) -> Optional[PrId]:
    """
    Find the pull request an Actions event is about.

    Returns None if the event isn't about a pull request.
    """
    pull_request = event.get("pull_request")
    if not pull_request:
        return None
    full_name = repository or event.get("repository", {}).get("full_name")
    if not full_name:
        return None
    return PrId(full_name, pull_request["number"])


def pr_from_environment(environ: Optional[Mapping[str, str]] = None) -> Optional[PrId]:
    """Find the pull request for this Actions run, from its environment."""
    environ = os.environ if environ is None else environ
    event_path = environ.get("GITHUB_EVENT_PATH")
    if not event_path or not os.path.exists(event_path):
        return None
    with open(event_path, encoding="utf-8") as f:
        event = json.load(f)
    return pr_from_event(event, environ.get("GITHUB_REPOSITORY"))
