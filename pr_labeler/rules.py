"""
Deciding whether a label's rules are satisfied by a set of changed files.

A label has a list of rule groups, and is satisfied if any of them is.  A
group can have "all" patterns, "any" patterns, or both:

- "all": every changed file satisfies every "all" pattern.
- "any": at least one changed file satisfies every "any" pattern.

With no changed files, "all" is satisfied and "any" is not.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional, Sequence, Tuple

from pr_labeler.globs import GlobPattern, satisfies

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RuleGroup:
    """One group of glob constraints for a label."""
    all: Optional[Tuple[GlobPattern, ...]] = None
    any: Optional[Tuple[GlobPattern, ...]] = None

    @classmethod
    def from_glob(cls, text: str) -> RuleGroup:
        """A bare glob string means "any file matches this"."""
        return cls(any=(GlobPattern.parse(text),))

    def as_json(self):
        j = {}
        if self.all is not None:
            j["all"] = [str(p) for p in self.all]
        if self.any is not None:
            j["any"] = [str(p) for p in self.any]
        return j


def _file_satisfies_all(changed_file: str, patterns: Sequence[GlobPattern]) -> bool:
    logger.debug(f"    matching patterns against file {changed_file}")
    for pattern in patterns:
        logger.debug(f"   - {pattern}")
        if not satisfies(changed_file, pattern):
            logger.debug(f"   {pattern} did not match")
            return False

    logger.debug("   all patterns matched")
    return True


def check_any(changed_files: Sequence[str], patterns: Sequence[GlobPattern]) -> bool:
    """Is there a single changed file that satisfies all of `patterns`?"""
    logger.debug('  checking "any" patterns')
    for changed_file in changed_files:
        if _file_satisfies_all(changed_file, patterns):
            logger.debug(f'  "any" patterns matched against {changed_file}')
            return True

    logger.debug('  "any" patterns did not match any files')
    return False


def check_all(changed_files: Sequence[str], patterns: Sequence[GlobPattern]) -> bool:
    """Does every changed file satisfy all of `patterns`?"""
    logger.debug(' checking "all" patterns')
    for changed_file in changed_files:
        if not _file_satisfies_all(changed_file, patterns):
            logger.debug(f'  "all" patterns did not match against {changed_file}')
            return False

    logger.debug('  "all" patterns matched all files')
    return True


def group_satisfied(changed_files: Sequence[str], group: RuleGroup) -> bool:
    """
    Is `group` satisfied by `changed_files`?

    A group with neither "all" nor "any" has no constraints, so it is always
    satisfied.
    """
    if group.all is not None:
        if not check_all(changed_files, group.all):
            return False

    if group.any is not None:
        if not check_any(changed_files, group.any):
            return False

    return True


def rule_satisfied(changed_files: Sequence[str], groups: Sequence[RuleGroup]) -> bool:
    """Is any of `groups` satisfied by `changed_files`?  Checked in order."""
    for group in groups:
        logger.debug(f" checking pattern {group.as_json()}")
        if group_satisfied(changed_files, group):
            return True
    return False
