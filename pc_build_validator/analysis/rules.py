"""
Compatibility rules.

Each rule inspects the components it names in required_categories and emits
zero or more findings. A rule with missing or unparseable data abstains: it
emits nothing rather than guessing.
"""

import math
from typing import Any, List, Optional

from ..extraction import (
    extract_cpu_generation,
    extract_gpu_length_estimate,
    mentions,
    normalize_token,
    parse_capacity_gb,
    parse_dimensions_mm,
    parse_length_mm,
    parse_speed_mhz,
    parse_wattage,
    split_list,
)
from ..logging_config import get_logger
from ..models import Build, ComponentCategory, ESSENTIAL_CATEGORIES, Finding
from .base import CompatibilityRule, RuleContext

logger = get_logger('analysis.rules')

CPU = ComponentCategory.CPU
GPU = ComponentCategory.GPU
RAM = ComponentCategory.RAM
MOTHERBOARD = ComponentCategory.MOTHERBOARD
STORAGE = ComponentCategory.STORAGE
PSU = ComponentCategory.PSU
CASE = ComponentCategory.CASE
COOLING = ComponentCategory.COOLING

# Categories whose presence makes a PSU recommendation meaningful
POWER_DRAWING_CATEGORIES = (CPU, GPU, RAM, STORAGE)

FORM_FACTOR_ALIASES = {
    "MATX": "MICROATX",
    "UATX": "MICROATX",
    "MITX": "MINIITX",
    "ITX": "MINIITX",
    "EXTENDEDATX": "EATX",
}


def _text(value: Any) -> Optional[str]:
    """Stripped text of a specification value, or None when blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _form_factor_key(value: Any) -> str:
    key = normalize_token(value)
    return FORM_FACTOR_ALIASES.get(key, key)


class CpuMotherboardSocketRule(CompatibilityRule):
    """CPU and motherboard sockets must match; chipset should support the CPU generation."""

    name = "cpu_motherboard_socket"
    required_categories = (CPU, MOTHERBOARD)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        cpu = build.get(CPU)
        motherboard = build.get(MOTHERBOARD)

        cpu_socket = _text(cpu.spec('socket'))
        mb_socket = _text(motherboard.spec('socket'))
        if not cpu_socket or not mb_socket:
            logger.debug("Socket not declared on CPU or motherboard, skipping socket check")
            return []

        if cpu_socket != mb_socket:
            return [self.issue(
                f"CPU socket {cpu_socket} is not compatible with motherboard socket {mb_socket}"
            )]

        generation = (extract_cpu_generation(cpu.name, cpu.brand)
                      or extract_cpu_generation(cpu.model, cpu.brand))
        chipset = _text(motherboard.spec('chipset'))
        if not generation or not chipset:
            return []

        supported = context.knowledge_base.chipsets_for(cpu_socket, generation)
        if supported is None:
            logger.debug(f"No chipset table entry for {cpu_socket} generation {generation}")
            return []

        if any(fragment.lower() in chipset.lower() for fragment in supported):
            return []

        return [self.warning(
            f"CPU {cpu.display_name} may need a BIOS update for the {chipset} chipset"
        )]


class RamMotherboardTypeRule(CompatibilityRule):
    """RAM type must be one of the motherboard's supported memory types."""

    name = "ram_motherboard_type"
    required_categories = (RAM, MOTHERBOARD)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        ram_type = _text(build.get(RAM).spec('memoryType', 'type'))
        mb_types = build.get(MOTHERBOARD).spec('memoryType')
        supported = split_list(mb_types)
        if not ram_type or not supported:
            return []

        if normalize_token(ram_type) in {normalize_token(t) for t in supported}:
            return []

        declared = mb_types if isinstance(mb_types, str) else "/".join(supported)
        return [self.issue(
            f"RAM type {ram_type} is not compatible with motherboard (supports: {declared})"
        )]


class RamCapacityRule(CompatibilityRule):
    """RAM capacity must not exceed the motherboard's maximum."""

    name = "ram_capacity"
    required_categories = (RAM, MOTHERBOARD)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        capacity_text = build.get(RAM).spec('capacity')
        max_text = build.get(MOTHERBOARD).spec('maxRam')
        capacity = parse_capacity_gb(capacity_text)
        max_ram = parse_capacity_gb(max_text)
        if capacity is None or max_ram is None:
            return []

        if capacity > max_ram:
            return [self.issue(
                f"RAM capacity {capacity_text} exceeds motherboard limit of {max_text}"
            )]
        return []


class RamSpeedRule(CompatibilityRule):
    """High-speed RAM may be down-clocked on budget chipsets."""

    name = "ram_speed"
    required_categories = (RAM, MOTHERBOARD)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        speed_text = build.get(RAM).spec('speed')
        speed = parse_speed_mhz(speed_text)
        chipset = _text(build.get(MOTHERBOARD).spec('chipset'))
        if speed is None or not chipset:
            return []

        if speed > context.config.high_speed_ram_mhz and context.knowledge_base.is_budget_chipset(chipset):
            return [self.warning(
                f"High-speed RAM ({speed_text}) may not run at full speed on {chipset} chipset"
            )]
        return []


class PowerBudgetRule(CompatibilityRule):
    """PSU wattage against the estimated system draw plus headroom."""

    name = "power_budget"

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        estimated = context.power.total_watts
        # Rounded first so float noise in the ratio cannot add a watt
        recommended = int(math.ceil(round(estimated * context.config.psu_headroom_ratio, 6)))

        psu = build.get(PSU)
        if psu is None:
            if not any(category in build.components for category in POWER_DRAWING_CATEGORIES):
                return []
            return [self.warning(
                f"No PSU selected. Estimated requirement: {recommended}W (80+ Gold recommended)"
            )]

        wattage = parse_wattage(psu.spec('wattage'))
        if wattage is None:
            logger.debug(f"Could not parse PSU wattage from {psu.spec('wattage')!r}")
            return []

        if wattage < estimated:
            return [self.issue(
                f"PSU wattage ({wattage}W) insufficient for build (needs ~{estimated}W minimum)"
            )]
        if wattage < recommended:
            return [self.warning(
                f"PSU wattage ({wattage}W) is close to requirements. Recommend {recommended}W for safety"
            )]
        return []


class GpuCaseClearanceRule(CompatibilityRule):
    """GPU card length against the case's maximum GPU length."""

    name = "gpu_case_clearance"
    required_categories = (GPU, CASE)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        length = self.gpu_length(build, context)
        max_length = parse_length_mm(build.get(CASE).spec('maxGpuLength'))

        if length is None or max_length is None:
            return [self.warning("Please verify GPU will fit in selected case")]

        if length > max_length:
            return [self.issue(
                f"GPU length (~{length}mm) exceeds case clearance ({max_length}mm)"
            )]
        if length > max_length * context.config.tight_fit_ratio:
            return [self.warning(
                f"GPU will be a tight fit in case ({length}mm vs {max_length}mm max)"
            )]
        return []

    @staticmethod
    def gpu_length(build: Build, context: RuleContext) -> Optional[int]:
        """Declared length or dimensions first, then an estimate from the model name."""
        gpu = build.get(GPU)
        for key in ('length', 'dimensions'):
            value = gpu.spec(key)
            for parse in (parse_dimensions_mm, parse_length_mm):
                length = parse(value)
                if length is not None:
                    return length
        return extract_gpu_length_estimate(gpu.name, context.knowledge_base)


class CaseFormFactorRule(CompatibilityRule):
    """Motherboard form factor must be supported by the case."""

    name = "case_form_factor"
    required_categories = (MOTHERBOARD, CASE)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        form_factor = _text(build.get(MOTHERBOARD).spec('formFactor'))
        supported = split_list(build.get(CASE).spec('motherboardSupport'))
        if not form_factor or not supported:
            return []

        if _form_factor_key(form_factor) in {_form_factor_key(f) for f in supported}:
            return []
        return [self.issue(f"Motherboard form factor {form_factor} not supported by case")]


class CoolingRule(CompatibilityRule):
    """Cooler socket and TDP rating against the CPU, or a cooler recommendation."""

    name = "cooling"
    required_categories = (CPU,)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        cpu = build.get(CPU)
        cooler = build.get(COOLING)
        cpu_tdp = parse_wattage(cpu.spec('tdp'))

        if cooler is None:
            if cpu_tdp is not None and cpu_tdp > context.config.stock_cooler_tdp_w:
                return [self.warning(f"High TDP CPU ({cpu_tdp}W) - aftermarket cooling recommended")]
            return []

        findings = []

        cpu_socket = _text(cpu.spec('socket'))
        cooler_sockets = split_list(cooler.spec('socket'))
        if cpu_socket and cooler_sockets and cpu_socket not in cooler_sockets:
            findings.append(self.issue(
                f"CPU cooler socket {'/'.join(cooler_sockets)} not compatible with CPU socket {cpu_socket}"
            ))

        cooler_tdp = parse_wattage(cooler.spec('tdpRating', 'maxTdp'))
        if cpu_tdp is not None and cooler_tdp is not None and cooler_tdp < cpu_tdp:
            findings.append(self.warning(
                f"CPU cooler TDP rating ({cooler_tdp}W) may be insufficient for CPU TDP ({cpu_tdp}W)"
            ))

        return findings


class StorageInterfaceRule(CompatibilityRule):
    """NVMe storage on chipsets with possible throughput limits."""

    name = "storage_interface"
    required_categories = (STORAGE, MOTHERBOARD)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        if not mentions(build.get(STORAGE).spec('interface'), 'nvme'):
            return []

        chipset = _text(build.get(MOTHERBOARD).spec('chipset'))
        if chipset and context.knowledge_base.is_legacy_nvme_chipset(chipset):
            return [self.warning(f"NVMe SSD may have limited performance on {chipset} chipset")]
        return []


class BuildCompletenessRule(CompatibilityRule):
    """Warn while too few slots are filled."""

    name = "build_completeness"

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        if build.component_count >= context.config.min_filled_slots:
            return []
        essentials = ", ".join(category.label for category in ESSENTIAL_CATEGORIES)
        return [self.warning(f"Build is incomplete. Essential components: {essentials}")]


class BudgetBalanceRule(CompatibilityRule):
    """Flag builds whose CPU/GPU spend is lopsided."""

    name = "budget_balance"
    required_categories = (CPU, GPU)

    def check(self, build: Build, context: RuleContext) -> List[Finding]:
        cpu_price = build.get(CPU).price or 0
        gpu_price = build.get(GPU).price or 0
        total = cpu_price + gpu_price
        if total <= 0:
            return []

        if cpu_price / total > context.config.cpu_share_threshold:
            return [self.warning("CPU-heavy build - consider upgrading GPU for better gaming performance")]
        if gpu_price / total > context.config.gpu_share_threshold:
            return [self.warning("GPU-heavy build - ensure CPU won't bottleneck performance")]
        return []


# Evaluation order; findings are reported in this order
DEFAULT_RULES = (
    CpuMotherboardSocketRule,
    RamMotherboardTypeRule,
    RamCapacityRule,
    RamSpeedRule,
    PowerBudgetRule,
    GpuCaseClearanceRule,
    CaseFormFactorRule,
    CoolingRule,
    StorageInterfaceRule,
    BuildCompletenessRule,
    BudgetBalanceRule,
)


def create_default_rules() -> List[CompatibilityRule]:
    """Instantiate the default rule set in evaluation order."""
    return [rule_class() for rule_class in DEFAULT_RULES]
