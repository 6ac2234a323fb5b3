"""
Reading labeler configuration files.

The file maps label names to rules::

    docs: "docs/**"
    frontend:
      - "src/**/*.js"
      - any: ["src/**/*.css", "!src/vendor/**"]
        all: ["src/**"]

A label's value is a single glob, or a list of globs and {any, all} groups.
Everything is normalized into a tuple of RuleGroup per label.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

import yaml

from pr_labeler.errors import ConfigFormatError, PatternSyntaxError
from pr_labeler.globs import GlobPattern
from pr_labeler.rules import RuleGroup

logger = logging.getLogger(__name__)

# Label names mapped to their rule groups, in config file order.
LabelRules = Dict[str, Tuple[RuleGroup, ...]]


def _patterns(label: str, value) -> Tuple[GlobPattern, ...]:
    """Parse the value of an "any" or "all" key into patterns."""
    match value:
        case str():
            return (GlobPattern.parse(value),)
        case list():
            return tuple(GlobPattern.parse(text) for text in value)
        case _:
            raise PatternSyntaxError(
                f"found unexpected patterns for label {label}: {value!r} (should be a glob or list of globs)"
            )


def _rule_group(label: str, item) -> RuleGroup:
    match item:
        case str():
            return RuleGroup.from_glob(item)
        case dict():
            all_patterns = any_patterns = None
            if item.get("all") is not None:
                all_patterns = _patterns(label, item["all"])
            if item.get("any") is not None:
                any_patterns = _patterns(label, item["any"])
            return RuleGroup(all=all_patterns, any=any_patterns)
        case _:
            raise PatternSyntaxError(
                f"found unexpected rule for label {label}: {item!r} (should be a glob or an any/all group)"
            )


def normalize(raw) -> LabelRules:
    """
    Turn a loaded config object into LabelRules.

    Raises ConfigFormatError if a label's value is not a string, a list, or
    a single any/all group.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigFormatError(
            f"found unexpected type for labeler config: {type(raw).__name__} (should be a mapping of labels)"
        )

    label_rules: LabelRules = {}
    for label, value in raw.items():
        label = str(label)
        match value:
            case str():
                label_rules[label] = (RuleGroup.from_glob(value),)
            case list():
                label_rules[label] = tuple(_rule_group(label, item) for item in value)
            case {"any": _} | {"all": _}:
                # A lone group, as if it were the only item of a list.
                label_rules[label] = (_rule_group(label, value),)
            case _:
                raise ConfigFormatError(
                    f"found unexpected type for label {label} (should be string or array of globs)"
                )
    return label_rules


class LabelConfigLoader(yaml.SafeLoader):
    """
    A safe YAML loader that keeps mapping keys as the text written.

    Plain YAML 1.1 would read a `yes:` or `null:` label as True or None.
    """


def _construct_mapping(loader, node):
    loader.flatten_mapping(node)
    for key_node, _ in node.value:
        if isinstance(key_node, yaml.ScalarNode):
            key_node.tag = "tag:yaml.org,2002:str"
    return loader.construct_mapping(node, deep=True)

LabelConfigLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping)


def parse_label_config(text: str) -> LabelRules:
    """Parse the YAML text of a labeler config file."""
    try:
        raw = yaml.load(text, Loader=LabelConfigLoader)
    except yaml.YAMLError as exc:
        raise ConfigFormatError(f"Couldn't parse labeler config as YAML: {exc}") from exc
    label_rules = normalize(raw)
    logger.debug(f"Read rules for {len(label_rules)} labels: {', '.join(label_rules)}")
    return label_rules
