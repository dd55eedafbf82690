"""
Concrete implementation of the build compatibility engine.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional

from ..config import Config
from ..knowledge_base import KnowledgeBase, KnowledgeBaseLoader, get_default_knowledge_base
from ..models import Build, BuildAnalysis, CompatibilityReport, Component, Finding
from .base import CompatibilityAnalyzer, CompatibilityRule, RuleContext
from .power import PowerEstimator
from .rules import create_default_rules

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BuildCompatibilityAnalyzer(CompatibilityAnalyzer):
    """
    Runs the rule set over a build and assembles the compatibility report.

    The power estimate is computed once per evaluation and shared with every
    rule through the RuleContext. Rules run in order and their findings are
    concatenated in that order.
    """

    def __init__(self, knowledge_base: Optional[KnowledgeBase] = None,
                 config: Optional[Config] = None,
                 rules: Optional[List[CompatibilityRule]] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the analyzer.

        Args:
            knowledge_base: Lookup tables; the bundled tables when omitted
            config: Thresholds and power constants; defaults when omitted
            rules: Rules to run, in order; the default rule set when omitted
            clock: Callable returning the timestamp stamped on each report
        """
        self.knowledge_base = knowledge_base or get_default_knowledge_base()
        self.config = config or Config()
        self.rules = list(rules) if rules is not None else create_default_rules()
        self.clock = clock or _utc_now
        self.power_estimator = PowerEstimator(self.knowledge_base, self.config.power)

        logger.debug(f"Initialized with rules: {[rule.name for rule in self.rules]}")

    def check_compatibility(self, build: Build) -> CompatibilityReport:
        """
        Evaluate a build and produce its compatibility report.

        Args:
            build: Build to evaluate

        Returns:
            CompatibilityReport reflecting exactly the build's current components
        """
        return self._evaluate(build)[0]

    def analyze(self, build: Build) -> BuildAnalysis:
        """
        Evaluate a build and collect the report, power breakdown and timing.

        Args:
            build: Build to evaluate

        Returns:
            BuildAnalysis for the reporters
        """
        start_time = time.time()
        logger.info(f"Checking build '{build.name}' with {build.component_count} components")

        report, power = self._evaluate(build)

        processing_time = time.time() - start_time
        logger.info(
            f"Check complete: {len(report.issues)} issues, {len(report.warnings)} warnings, "
            f"~{report.estimated_wattage}W estimated"
        )

        return BuildAnalysis(
            build=build,
            report=report,
            power=power,
            processing_time=processing_time,
        )

    def check_components(self, components: Mapping[Any, Optional[Component]],
                         name: str = "Untitled build") -> CompatibilityReport:
        """
        Evaluate a mapping of category to optional component.

        Args:
            components: Mapping of category (enum or name) to Component or None
            name: Build name

        Returns:
            CompatibilityReport for the filled slots
        """
        return self.check_compatibility(Build.from_components(components, name=name))

    def _evaluate(self, build: Build):
        power = self.power_estimator.estimate(build)
        context = RuleContext(
            knowledge_base=self.knowledge_base,
            config=self.config.rules,
            power=power,
        )

        findings: List[Finding] = []
        for rule in self.rules:
            try:
                rule_findings = rule.evaluate(build, context)
            except Exception as e:
                # A broken rule must not abort the whole check
                logger.error(f"Rule '{rule.name}' failed on build '{build.name}': {e}")
                continue
            if rule_findings:
                logger.debug(f"Rule '{rule.name}' produced {len(rule_findings)} findings")
            findings.extend(rule_findings)

        report = CompatibilityReport(
            findings=tuple(findings),
            estimated_wattage=power.total_watts,
            last_checked=self.clock(),
        )
        return report, power


def create_analyzer(config: Optional[Config] = None,
                    knowledge_base: Optional[KnowledgeBase] = None) -> BuildCompatibilityAnalyzer:
    """
    Factory function to create an analyzer wired to configuration.

    Extra knowledge base files from the configuration are loaded on top of
    the bundled tables.

    Args:
        config: Configuration; defaults when omitted
        knowledge_base: Pre-loaded lookup tables, overriding the configured ones

    Returns:
        BuildCompatibilityAnalyzer instance
    """
    config = config or Config()

    if knowledge_base is None:
        kb_config = config.knowledge_base
        if kb_config.files or not kb_config.include_defaults:
            loader = KnowledgeBaseLoader(include_defaults=kb_config.include_defaults)
            knowledge_base = loader.load_multiple(kb_config.files)
        else:
            knowledge_base = get_default_knowledge_base()

    return BuildCompatibilityAnalyzer(knowledge_base=knowledge_base, config=config)
