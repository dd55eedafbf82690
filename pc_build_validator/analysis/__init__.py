"""
Analysis Module

Contains the rule evaluator, power estimator and the compatibility engine
that combines them into a report.
"""

from .base import CompatibilityAnalyzer, CompatibilityRule, RuleContext
from .compatibility_analyzer import BuildCompatibilityAnalyzer, create_analyzer
from .power import PowerEstimator, estimate_build_wattage
from .rules import (
    DEFAULT_RULES,
    BudgetBalanceRule,
    BuildCompletenessRule,
    CaseFormFactorRule,
    CoolingRule,
    CpuMotherboardSocketRule,
    GpuCaseClearanceRule,
    PowerBudgetRule,
    RamCapacityRule,
    RamMotherboardTypeRule,
    RamSpeedRule,
    StorageInterfaceRule,
    create_default_rules,
)

__all__ = [
    # Base classes
    'CompatibilityAnalyzer',
    'CompatibilityRule',
    'RuleContext',

    # Engine
    'BuildCompatibilityAnalyzer',
    'create_analyzer',
    'PowerEstimator',
    'estimate_build_wattage',

    # Rules
    'DEFAULT_RULES',
    'create_default_rules',
    'CpuMotherboardSocketRule',
    'RamMotherboardTypeRule',
    'RamCapacityRule',
    'RamSpeedRule',
    'PowerBudgetRule',
    'GpuCaseClearanceRule',
    'CaseFormFactorRule',
    'CoolingRule',
    'StorageInterfaceRule',
    'BuildCompletenessRule',
    'BudgetBalanceRule',
]
