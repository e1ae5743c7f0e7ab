"""Naming rule sets."""

from audioshelf.rules.base import RuleSet
from audioshelf.rules.template import TemplateRuleSet

__all__ = ["RuleSet", "TemplateRuleSet"]
