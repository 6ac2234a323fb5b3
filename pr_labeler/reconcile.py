"""
Deciding which labels to add to and remove from a pull request.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Sequence, Tuple

from pr_labeler.errors import InvalidConfigurationError, TruncationExceededError
from pr_labeler.label_config import LabelRules
from pr_labeler.rules import rule_satisfied

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ReconciliationResult:
    """
    The label changes to make on a pull request.

    Labels appear in config order.  Labels to remove are always on the pull
    request now, labels to add never are.
    """
    to_add: Tuple[str, ...] = ()
    to_remove: Tuple[str, ...] = ()
    # Labels on the pull request that no rule mentions.  Only for reporting.
    unmanaged: Tuple[str, ...] = ()

    @property
    def nothing_to_do(self) -> bool:
        return not self.to_add and not self.to_remove

    def as_json(self):
        return {
            "to_add": list(self.to_add),
            "to_remove": list(self.to_remove),
            "unmanaged": list(self.unmanaged),
        }


def reconcile(
        current: Iterable[str],
        rules: LabelRules,
        changed_files: Sequence[str],
        truncate_limit: int,
        sync_mode: bool,
        target: str = "the pull request",
    ) -> ReconciliationResult:
    """
    Compute the labels to add and remove, given the current labels.

    Rules are checked in order.  A satisfied label is added only while the
    labels being added plus the unmanaged labels still fit in `truncate_limit`,
    so late labels in the config lose out once the budget is used up.  A label
    that isn't satisfied (or didn't fit) and is on the pull request now is a
    candidate for removal.

    Without `sync_mode`, nothing is ever removed, and if the end state would
    need more than `truncate_limit` labels, TruncationExceededError is raised.

    Arguments:
        current: the names of the labels on the pull request now.
        rules: the normalized labeler config.
        changed_files: the paths changed by the pull request.
        truncate_limit: the most labels we budget for.
        sync_mode: should non-matching labels be removed?
        target: how to describe the pull request in error messages.

    """
    if isinstance(truncate_limit, bool) or not isinstance(truncate_limit, int) or truncate_limit <= 0:
        raise InvalidConfigurationError("Truncate value must be a positive integer.")

    current_labels = list(dict.fromkeys(current))
    unmanaged = [label for label in current_labels if label not in rules]

    logger.info(f"there are currently {len(current_labels)} labels total")
    if unmanaged:
        logger.info(f"and {len(unmanaged)} labels unmanaged by this labeler")
        logger.debug("- " + "\n- ".join(unmanaged))
    logger.info(f"truncating will occur after {truncate_limit} labels")

    to_add: List[str] = []
    to_remove: List[str] = []
    # Satisfied labels left out because the budget was already used up.
    truncated: List[str] = []
    for label, groups in rules.items():
        logger.debug(f"processing {label}")
        satisfied = rule_satisfied(changed_files, groups)
        if satisfied and len(to_add) + len(unmanaged) <= truncate_limit:
            if label not in current_labels:
                to_add.append(label)
        elif label in current_labels:
            to_remove.append(label)
        elif satisfied:
            truncated.append(label)

    if truncated:
        logger.info(f"{len(truncated)} matching labels didn't fit: {', '.join(truncated)}")

    if not sync_mode:
        # Truncation only happens once the budget is exceeded, so counting
        # the truncated labels changes the overflow, never whether we fail.
        total = len(to_add) + len(unmanaged) + len(to_remove) + len(truncated)
        if total > truncate_limit:
            overflow = total - truncate_limit
            raise TruncationExceededError(
                f"Cannot add more than {truncate_limit} labels to {target}. "
                + f"Enable sync-labels or manually remove {overflow} labels.",
                overflow=overflow,
            )
        to_remove = []

    return ReconciliationResult(
        to_add=tuple(to_add),
        to_remove=tuple(to_remove),
        unmanaged=tuple(unmanaged),
    )
