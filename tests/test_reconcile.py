"""Tests of reconcile.py"""

import itertools

import pytest

from pr_labeler.errors import InvalidConfigurationError, TruncationExceededError
from pr_labeler.label_config import normalize
from pr_labeler.reconcile import ReconciliationResult, reconcile


FEATURE_DOCS = normalize({"feature": "src/**/*.ts", "docs": {"all": ["*.md"]}})


def test_adds_matching_label():
    result = reconcile([], FEATURE_DOCS, ["src/app.ts"], truncate_limit=10, sync_mode=False)
    assert result.to_add == ("feature",)
    assert result.to_remove == ()


def test_sync_removes_label_that_no_longer_matches():
    result = reconcile(["docs"], FEATURE_DOCS, ["src/app.ts"], truncate_limit=10, sync_mode=True)
    assert result.to_add == ("feature",)
    assert result.to_remove == ("docs",)


def test_without_sync_nothing_is_removed():
    result = reconcile(["docs"], FEATURE_DOCS, ["src/app.ts"], truncate_limit=10, sync_mode=False)
    assert result.to_add == ("feature",)
    assert result.to_remove == ()


@pytest.mark.parametrize("sync_mode", [False, True])
def test_already_labeled_is_nothing_to_do(sync_mode):
    rules = normalize({"x": "a.txt"})
    result = reconcile(["x"], rules, ["a.txt"], truncate_limit=10, sync_mode=sync_mode)
    assert result.to_add == ()
    assert result.to_remove == ()
    assert result.nothing_to_do


def test_all_group_applies_when_nothing_changed():
    result = reconcile([], FEATURE_DOCS, [], truncate_limit=10, sync_mode=False)
    assert result.to_add == ("docs",)


def test_additions_are_in_config_order():
    rules = normalize({"c": "*", "a": "*", "b": "*"})
    result = reconcile([], rules, ["x"], truncate_limit=10, sync_mode=False)
    assert result.to_add == ("c", "a", "b")


def test_unmanaged_labels_are_left_alone():
    rules = normalize({"docs": "docs/**"})
    result = reconcile(["bug", "docs", "help wanted"], rules, ["src/a.py"], truncate_limit=10, sync_mode=True)
    assert result.to_remove == ("docs",)
    assert result.to_add == ()
    assert result.unmanaged == ("bug", "help wanted")


def test_truncation_exceeded():
    rules = normalize({"a": "*", "b": "*", "c": "*"})
    with pytest.raises(TruncationExceededError) as excinfo:
        reconcile(["unmanaged"], rules, ["x"], truncate_limit=2, sync_mode=False)
    assert excinfo.value.overflow == 2
    assert str(excinfo.value) == (
        "Cannot add more than 2 labels to the pull request. "
        + "Enable sync-labels or manually remove 2 labels."
    )


def test_truncation_message_names_target():
    rules = normalize({"a": "*", "b": "*", "c": "*"})
    with pytest.raises(TruncationExceededError, match="to #17. "):
        reconcile(["unmanaged"], rules, ["x"], truncate_limit=2, sync_mode=False, target="#17")


def test_truncation_counts_present_labels_that_would_be_removed():
    rules = normalize({"docs": "docs/**", "a": "*", "b": "*"})
    with pytest.raises(TruncationExceededError) as excinfo:
        reconcile(["docs", "u1"], rules, ["x"], truncate_limit=2, sync_mode=False)
    # a and b added, u1 unmanaged, docs stale: 4 labels.
    assert excinfo.value.overflow == 2


def test_no_truncation_error_when_within_budget():
    rules = normalize({"a": "*", "b": "*"})
    result = reconcile(["u1"], rules, ["x"], truncate_limit=3, sync_mode=False)
    assert result.to_add == ("a", "b")


def test_sync_mode_drops_labels_past_the_budget():
    rules = normalize({"a": "*", "b": "*", "c": "*"})
    result = reconcile(["u1", "c"], rules, ["x"], truncate_limit=2, sync_mode=True)
    assert result.to_add == ("a", "b")
    assert result.to_remove == ("c",)


def test_sync_mode_never_raises_truncation():
    rules = normalize({name: "*" for name in "abcdefg"})
    result = reconcile(["u1", "u2"], rules, ["x"], truncate_limit=2, sync_mode=True)
    assert result.to_add == ("a",)


def test_present_labels_dont_use_the_budget():
    rules = normalize({"a": "*", "b": "*", "c": "*"})
    result = reconcile(["a", "b", "c"], rules, ["x"], truncate_limit=1, sync_mode=False)
    assert result.nothing_to_do


@pytest.mark.parametrize("limit", [0, -1, -100, 2.5, "10", None, True])
def test_bad_truncate_limit(limit):
    with pytest.raises(InvalidConfigurationError, match="Truncate value must be a positive integer"):
        reconcile([], FEATURE_DOCS, ["src/app.ts"], truncate_limit=limit, sync_mode=False)


def test_bad_truncate_limit_is_checked_before_matching(mocker):
    rule_satisfied = mocker.patch("pr_labeler.reconcile.rule_satisfied")
    with pytest.raises(InvalidConfigurationError):
        reconcile([], FEATURE_DOCS, ["src/app.ts"], truncate_limit=0, sync_mode=True)
    rule_satisfied.assert_not_called()


def test_as_json():
    result = ReconciliationResult(to_add=("a",), to_remove=("b",), unmanaged=("c",))
    assert result.as_json() == {"to_add": ["a"], "to_remove": ["b"], "unmanaged": ["c"]}
    assert not result.nothing_to_do
    assert ReconciliationResult().nothing_to_do


RULES = normalize({
    "docs": ["docs/**", "*.md"],
    "src": {"any": ["src/**"]},
    "tests-only": [{"all": ["tests/**"]}],
    "no-docs": [{"all": ["!docs/**"], "any": ["**"]}],
})

CURRENT_CHOICES = [[], ["docs"], ["bug"], ["src", "bug"], ["tests-only", "no-docs", "docs"]]
FILE_CHOICES = [[], ["README.md"], ["src/a.py", "docs/x.rst"], ["tests/test_a.py"], ["src/b.py"]]


@pytest.mark.parametrize(
    "current, files, sync_mode",
    itertools.product(CURRENT_CHOICES, FILE_CHOICES, [False, True]),
)
def test_result_properties(current, files, sync_mode):
    result = reconcile(current, RULES, files, truncate_limit=10, sync_mode=sync_mode)

    # Running again gives the same answer.
    assert reconcile(current, RULES, files, truncate_limit=10, sync_mode=sync_mode) == result

    to_add = set(result.to_add)
    to_remove = set(result.to_remove)
    assert not to_add & to_remove
    assert not to_add & set(current)
    assert to_remove <= set(current)

    unmanaged = set(current) - set(RULES)
    assert not unmanaged & (to_add | to_remove)
    if not sync_mode:
        assert not to_remove
