"""
Labeling a pull request from the files it changes.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pr_labeler import settings
from pr_labeler.auth import get_github_session
from pr_labeler.github_work import (
    add_labels,
    get_changed_files,
    get_pull_request,
    read_repo_file,
    remove_label,
)
from pr_labeler.label_config import parse_label_config
from pr_labeler.reconcile import ReconciliationResult, reconcile
from pr_labeler.types import PrDict, PrId
from pr_labeler.utils import sentry_extra_context

logger = logging.getLogger(__name__)


class LabelingActions:
    """
    Implementation of the actions that change a pull request's labels.

    All arguments must be JSON-serializable so that dry-runs can report on
    the actions.
    """

    def __init__(self, session, prid: PrId):
        self.session = session
        self.prid = prid

    def remove_label(self, *, label: str) -> None:
        logger.info(f"Removing label {label!r} from PR {self.prid}")
        remove_label(self.session, self.prid, label)

    def add_labels(self, *, labels: List[str]) -> None:
        logger.info(f"Adding labels to PR {self.prid}: {labels}")
        add_labels(self.session, self.prid, labels)


class DryRunLabelingActions:
    """
    Implementation of actions for dry runs.
    """

    def __init__(self):
        self.action_calls = []

    def __getattr__(self, name):
        def fn(**kwargs):
            self.action_calls.append((name, kwargs))
        return fn


def apply_result(result: ReconciliationResult, actions) -> None:
    """
    Make the label changes in `result`.

    Removals go first, so that slots are freed before new labels take them.
    """
    if result.to_remove:
        logger.info(f"removing {len(result.to_remove)} labels")
        logger.debug("- " + "\n- ".join(result.to_remove))
        for label in result.to_remove:
            actions.remove_label(label=label)

    if result.to_add:
        logger.info(f"adding {len(result.to_add)} labels")
        logger.debug("- " + "\n- ".join(result.to_add))
        actions.add_labels(labels=list(result.to_add))


def label_pull_request(
        prid: PrId,
        configuration_path: str,
        sync_labels: bool = False,
        truncate: int = settings.TRUNCATE_HARD_LIMIT,
        token: Optional[str] = None,
        actions=None,
    ) -> ReconciliationResult:
    """
    Label a pull request according to the labeler config in its repo.

    Everything is read from GitHub first, then the changes are decided, then
    they are made.  If deciding fails, nothing is changed on GitHub.

    Arguments:
        prid: the pull request to label.
        configuration_path: where the labeler config is in the repo.
        sync_labels: if True, remove managed labels that no longer match.
        truncate: the most labels the pull request should end up with.
        token: the GitHub token to use, GITHUB_PERSONAL_TOKEN by default.
        actions: the object that makes changes, a LabelingActions by default.
            Pass a DryRunLabelingActions to only record what would be done.

    Returns:
        The ReconciliationResult that was applied.
    """
    sentry_extra_context({"pull_request": str(prid)})
    session = get_github_session(token)
    if actions is None:
        actions = LabelingActions(session, prid)

    pr: PrDict = get_pull_request(session, prid)
    current_labels = [lbl["name"] for lbl in pr["labels"]]

    logger.debug(f"fetching changed files for pr {prid}")
    changed_files = get_changed_files(session, prid)
    config_text = read_repo_file(session, prid, configuration_path, ref=pr["head"]["sha"])
    label_rules = parse_label_config(config_text)

    result = reconcile(
        current_labels,
        label_rules,
        changed_files,
        truncate_limit=truncate,
        sync_mode=sync_labels,
        target=f"#{prid.number}",
    )
    sentry_extra_context({"labels": result.as_json()})

    if result.nothing_to_do:
        logger.info("Nothing to do.")
        return result

    apply_result(result, actions)
    return result
