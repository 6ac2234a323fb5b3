"""
Exceptions raised while deciding which labels a pull request should have.

All of them are fatal for a labeling run: once one is raised, no labels are
added or removed.
"""


class LabelerError(Exception):
    """Base class for labeling failures."""


class ConfigFormatError(LabelerError):
    """The labeler configuration doesn't have the shape we need."""


class PatternSyntaxError(LabelerError):
    """A glob pattern in the configuration can't be used."""


class InvalidConfigurationError(LabelerError):
    """The run was asked for something impossible, like a truncate of zero."""


class TruncationExceededError(LabelerError):
    """Adding the matched labels would put the pull request over the limit."""

    def __init__(self, message: str, overflow: int):
        super().__init__(message)
        self.overflow = overflow
