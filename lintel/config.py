from __future__ import annotations

"""
Rule registry and selection: which rules exist and which ones run.

Every implemented rule is listed in ``_RULE_CLASSES``; this module is the single
place to register a new one. ``build_config`` turns tag/include/exclude lists
(from the CLI or a caller) into a Config holding fresh rule instances.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from lintel.errors import DuplicateRuleCodeError, UnknownRuleError, UnknownTagError
from lintel.rules.base import Rule
from lintel.rules.no_delete_var import NoDeleteVarRule

logger = logging.getLogger(__name__)

RECOMMENDED_TAG = "recommended"

_RULE_CLASSES: tuple[type[Rule], ...] = (
    NoDeleteVarRule,
)


@dataclass
class Config:
    """
    Linter configuration.

    Carries the rules to run, in run order. Rules are stateless, so one Config
    can be reused for any number of programs.
    """

    rules: Sequence[Rule] = field(default_factory=list)

    @property
    def codes(self) -> list[str]:
        return [rule.code() for rule in self.rules]


def check_unique_codes(rules: Iterable[Rule]) -> None:
    """Raise DuplicateRuleCodeError if two rules share a code."""
    seen: set[str] = set()
    for rule in rules:
        code = rule.code()
        if code in seen:
            raise DuplicateRuleCodeError(code)
        seen.add(code)


def get_all_rules() -> List[Rule]:
    """Return one fresh instance of every registered rule, sorted by code."""
    rules = [cls() for cls in _RULE_CLASSES]
    check_unique_codes(rules)
    return sorted(rules, key=lambda r: r.code())


def get_recommended_rules() -> List[Rule]:
    return [rule for rule in get_all_rules() if RECOMMENDED_TAG in rule.tags()]


def get_rule(code: str) -> Rule:
    """Look up a rule by code. Raises UnknownRuleError."""
    for rule in get_all_rules():
        if rule.code() == code:
            return rule
    raise UnknownRuleError(code)


def get_all_tags() -> set[str]:
    tags: set[str] = set()
    for rule in get_all_rules():
        tags.update(rule.tags())
    return tags


def select_rules(
    rules: Sequence[Rule],
    tags: Optional[Iterable[str]] = None,
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[Rule]:
    """
    Pick rules by tag, then add included codes and drop excluded ones.

    Args:
        rules: Candidate rules (normally get_all_rules()).
        tags: Keep rules carrying any of these tags. None means "recommended";
              an empty list selects nothing by tag.
        include: Codes to add regardless of tags.
        exclude: Codes to drop; wins over include.

    Returns:
        Selected rules sorted by code.

    Raises:
        DuplicateRuleCodeError, UnknownTagError, UnknownRuleError.
    """
    rules = list(rules)
    check_unique_codes(rules)
    by_code = {rule.code(): rule for rule in rules}
    known_tags = {tag for rule in rules for tag in rule.tags()}

    tags = [RECOMMENDED_TAG] if tags is None else list(tags)
    for tag in tags:
        if tag not in known_tags:
            raise UnknownTagError(tag)
    include = list(include or [])
    exclude = list(exclude or [])
    for code in (*include, *exclude):
        if code not in by_code:
            raise UnknownRuleError(code)

    selected = {code for code, rule in by_code.items() if rule.tags() & set(tags)}
    selected.update(include)
    selected.difference_update(exclude)
    logger.debug("Selected rules: %s", sorted(selected))
    return [by_code[code] for code in sorted(selected)]


def build_config(
    tags: Optional[Iterable[str]] = None,
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> Config:
    return Config(rules=select_rules(get_all_rules(), tags=tags, include=include, exclude=exclude))


def get_default_config() -> Config:
    """Return the configuration the CLI uses without flags: the recommended rules."""
    return build_config()


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """Return the rules from the given config (or the default config)."""
    if config is None:
        config = get_default_config()
    return config.rules
