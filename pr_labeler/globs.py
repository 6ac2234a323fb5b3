"""
Matching file paths against the glob patterns in a labeler config.

Patterns follow the usual shell conventions: ``*`` and ``?`` stay inside one
directory, ``**`` crosses directories, ``{a,b}`` expands, ``[abc]`` is a
character class, and ``+(a|b)`` style extended globs work.  Files and
directories starting with a dot are only matched if the pattern spells the
dot out.

A pattern starting with ``!`` is negated: a file satisfies it if it does NOT
match the rest of the pattern.
"""

from __future__ import annotations

import dataclasses

from wcmatch import glob

from pr_labeler.errors import PatternSyntaxError
from pr_labeler.utils import memoize

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.FORCEUNIX


@dataclasses.dataclass(frozen=True)
class GlobPattern:
    """A glob pattern, with its negation marker already parsed off."""
    pattern: str
    negated: bool = False

    @classmethod
    def parse(cls, text) -> GlobPattern:
        """
        Make a GlobPattern from its config text.

        Every leading ``!`` flips the negation, so ``!!foo`` is just ``foo``.
        """
        if not isinstance(text, str):
            raise PatternSyntaxError(f"Glob patterns must be strings, not {text!r}")
        negated = False
        pattern = text
        while pattern.startswith("!"):
            negated = not negated
            pattern = pattern[1:]
        if not pattern:
            raise PatternSyntaxError(f"Empty glob pattern: {text!r}")
        return cls(pattern, negated)

    def __str__(self):
        return ("!" if self.negated else "") + self.pattern


@memoize
def _check_pattern(pattern: str) -> None:
    """Make sure wcmatch can compile `pattern`, once per pattern."""
    try:
        glob.translate(pattern, flags=GLOB_FLAGS)
    except Exception as exc:    # pylint: disable=broad-except
        raise PatternSyntaxError(f"Couldn't understand glob pattern {pattern!r}: {exc}") from exc


def matches(path: str, pattern: GlobPattern) -> bool:
    """
    Does `path` match the glob in `pattern`?

    The negation marker is ignored here, see `satisfies`.
    """
    _check_pattern(pattern.pattern)
    return glob.globmatch(path, pattern.pattern, flags=GLOB_FLAGS)


def satisfies(path: str, pattern: GlobPattern) -> bool:
    """
    Does `path` meet the constraint expressed by `pattern`?

    Plain patterns must match, negated patterns must not.
    """
    return matches(path, pattern) != pattern.negated
