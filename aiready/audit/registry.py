"""Rule registry for managing available issue rules."""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from aiready.audit.base import BaseRule, IssueCategory, IssueDefinition, RuleResult
from aiready.audit.definitions import ISSUE_DEFINITIONS
from aiready.signals import PageSignals


class RuleRegistry:
    """Registry for managing and running issue rules.

    Rules run in registration order. Every rule's code must exist in the
    registry's catalog.

    Usage:
        registry = RuleRegistry()
        registry.register(FunctionRule("MISSING_H1", check_missing_h1))
        results = registry.run_all(signals)
    """

    def __init__(self, definitions: Mapping[str, IssueDefinition] = ISSUE_DEFINITIONS):
        self._definitions = definitions
        self._rules: dict[str, BaseRule] = {}
        self._categories: dict[IssueCategory, list[str]] = {}

    @property
    def definitions(self) -> Mapping[str, IssueDefinition]:
        return self._definitions

    def register(self, rule: BaseRule) -> None:
        """Register a rule instance.

        Args:
            rule: Rule instance to register

        Raises:
            ValueError: If the rule's code is not in the catalog
        """
        definition = self._definitions.get(rule.code)
        if definition is None:
            raise ValueError(f"Unknown issue code: {rule.code}")
        self._rules[rule.code] = rule

        category = definition.category
        if category not in self._categories:
            self._categories[category] = []
        if rule.code not in self._categories[category]:
            self._categories[category].append(rule.code)

    def register_all(self, rules: Iterable[BaseRule]) -> None:
        for rule in rules:
            self.register(rule)

    def unregister(self, code: str) -> None:
        """Unregister a rule by code."""
        if code in self._rules:
            del self._rules[code]
            category = self._definitions[code].category
            if category in self._categories:
                self._categories[category] = [
                    c for c in self._categories[category] if c != code
                ]

    def get(self, code: str) -> BaseRule | None:
        return self._rules.get(code)

    def get_by_category(self, category: IssueCategory) -> list[BaseRule]:
        codes = self._categories.get(category, [])
        return [self._rules[c] for c in codes if c in self._rules]

    def list_all(self) -> list[BaseRule]:
        return list(self._rules.values())

    def list_categories(self) -> list[IssueCategory]:
        return list(self._categories.keys())

    def run(self, code: str, signals: PageSignals) -> RuleResult | None:
        """Run a specific rule.

        Returns:
            RuleResult or None if no rule is registered for the code
        """
        rule = self._rules.get(code)
        if rule is None:
            return None
        return rule.run(signals, self._definitions[code])

    def run_category(self, category: IssueCategory, signals: PageSignals) -> list[RuleResult]:
        """Run all rules in a category."""
        return [
            rule.run(signals, self._definitions[rule.code])
            for rule in self.get_by_category(category)
        ]

    def run_all(self, signals: PageSignals) -> list[RuleResult]:
        """Run all registered rules in registration order."""
        return [
            rule.run(signals, self._definitions[code])
            for code, rule in self._rules.items()
        ]


def build_default_registry(
    definitions: Mapping[str, IssueDefinition] = ISSUE_DEFINITIONS,
) -> RuleRegistry:
    """Registry with every built-in rule, grouped technical → performance."""
    from aiready.audit.ai_rules import AI_READINESS_RULES
    from aiready.audit.content_rules import CONTENT_RULES
    from aiready.audit.performance_rules import PERFORMANCE_RULES
    from aiready.audit.technical_rules import TECHNICAL_RULES

    registry = RuleRegistry(definitions)
    registry.register_all(TECHNICAL_RULES)
    registry.register_all(CONTENT_RULES)
    registry.register_all(AI_READINESS_RULES)
    registry.register_all(PERFORMANCE_RULES)
    return registry


# Global registry instance
default_registry = build_default_registry()
