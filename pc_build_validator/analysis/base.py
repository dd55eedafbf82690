"""
Abstract base classes for analysis functionality.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple

from ..config import RuleConfig
from ..knowledge_base.base import KnowledgeBase
from ..models import (
    Build,
    BuildAnalysis,
    CompatibilityReport,
    ComponentCategory,
    Finding,
    PowerEstimate,
)


@dataclass(frozen=True)
class RuleContext:
    """Read-only inputs shared by every rule in one evaluation."""
    knowledge_base: KnowledgeBase
    config: RuleConfig
    power: PowerEstimate


class CompatibilityRule(ABC):
    """
    Abstract base class for a single compatibility rule.

    A rule runs only when every category in required_categories is filled;
    otherwise it is skipped without a finding.
    """

    name: str = ""
    required_categories: Tuple[ComponentCategory, ...] = ()

    def applies_to(self, build: Build) -> bool:
        return all(category in build.components for category in self.required_categories)

    def evaluate(self, build: Build, context: RuleContext) -> List[Finding]:
        """
        Run the rule against a build.

        Args:
            build: Build to check
            context: Shared knowledge base, thresholds and power estimate

        Returns:
            Findings emitted by the rule (possibly empty)
        """
        if not self.applies_to(build):
            return []
        return list(self.check(build, context))

    @abstractmethod
    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        """
        Check a build whose required categories are all present.

        Args:
            build: Build to check
            context: Shared knowledge base, thresholds and power estimate

        Returns:
            Findings emitted by the rule
        """
        pass

    def issue(self, message: str) -> Finding:
        return Finding.issue(self.name, message)

    def warning(self, message: str) -> Finding:
        return Finding.warning(self.name, message)


class CompatibilityAnalyzer(ABC):
    """Abstract base class for compatibility analysis."""

    @abstractmethod
    def check_compatibility(self, build: Build) -> CompatibilityReport:
        """
        Evaluate a build and produce its compatibility report.

        Args:
            build: Build to evaluate

        Returns:
            CompatibilityReport for the build's current component set
        """
        pass

    @abstractmethod
    def analyze(self, build: Build) -> BuildAnalysis:
        """
        Evaluate a build and collect everything the reporters need.

        Args:
            build: Build to evaluate

        Returns:
            BuildAnalysis with report and power breakdown
        """
        pass
