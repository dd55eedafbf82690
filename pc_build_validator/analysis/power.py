"""
Power estimation for a whole build.
"""

import math
from typing import Optional

from ..config import PowerConfig
from ..extraction import (
    estimate_cpu_power_w,
    estimate_gpu_power_w,
    mentions,
    parse_capacity_gb,
    parse_speed_mhz,
    parse_wattage,
)
from ..knowledge_base import KnowledgeBase, get_default_knowledge_base
from ..logging_config import get_logger
from ..models import Build, Component, ComponentCategory, PowerEstimate

logger = get_logger('analysis.power')


class PowerEstimator:
    """Estimates system power draw from declared values and lookup tables."""

    def __init__(self, knowledge_base: Optional[KnowledgeBase] = None, config: Optional[PowerConfig] = None):
        self.knowledge_base = knowledge_base or get_default_knowledge_base()
        self.config = config or PowerConfig()

    def estimate(self, build: Build) -> PowerEstimate:
        """
        Estimate the build's power draw.

        Starts from the base overhead (motherboard, fans, misc) and adds the
        CPU, GPU, RAM and storage contributions. Other slots draw nothing
        beyond the base overhead.

        Args:
            build: Build to estimate

        Returns:
            PowerEstimate with the total rounded up to the next watt
        """
        breakdown = []
        total = float(self.config.base_overhead_w)

        for category in build.filled_slots:
            watts = self.component_watts(build.components[category])
            if watts is None:
                continue
            breakdown.append((category, watts))
            total += watts

        logger.debug(f"Estimated {total:.1f}W for build '{build.name}'")
        return PowerEstimate(
            total_watts=int(math.ceil(total)),
            base_watts=self.config.base_overhead_w,
            breakdown=tuple(breakdown),
        )

    def component_watts(self, component: Component) -> Optional[float]:
        """
        Get one component's contribution, or None for slots that are not counted.

        Args:
            component: Installed component

        Returns:
            Watts contributed by the component
        """
        if component.category is ComponentCategory.CPU:
            return self._cpu_watts(component)
        if component.category is ComponentCategory.GPU:
            return self._gpu_watts(component)
        if component.category is ComponentCategory.RAM:
            return self._ram_watts(component)
        if component.category is ComponentCategory.STORAGE:
            return self._storage_watts(component)
        return None

    def _cpu_watts(self, cpu: Component) -> float:
        declared = parse_wattage(cpu.spec('tdp'))
        if declared is not None:
            return declared
        return estimate_cpu_power_w(cpu.name, self.knowledge_base)

    def _gpu_watts(self, gpu: Component) -> float:
        estimate = estimate_gpu_power_w(gpu.name, self.knowledge_base)
        recommended_psu = parse_wattage(gpu.spec('recommendedPSU', 'recommendedPsu'))
        if recommended_psu is None:
            return estimate
        # Recommended PSU figures include headroom for the rest of the system
        return max(recommended_psu - self.config.gpu_psu_headroom_w, estimate)

    def _ram_watts(self, ram: Component) -> float:
        capacity = parse_capacity_gb(ram.spec('capacity')) or 0
        speed = parse_speed_mhz(ram.spec('speed')) or 0
        bonus = self.config.ram_high_speed_bonus_w if speed > self.config.ram_high_speed_mhz else 0
        return max(self.config.ram_min_w, capacity * self.config.ram_w_per_gb + bonus)

    def _storage_watts(self, storage: Component) -> float:
        if mentions(storage.spec('interface'), 'nvme'):
            return self.config.nvme_storage_w
        return self.config.drive_storage_w


def estimate_build_wattage(build: Build, knowledge_base: Optional[KnowledgeBase] = None,
                           config: Optional[PowerConfig] = None) -> int:
    """
    Estimate a build's total power draw in watts.

    Args:
        build: Build to estimate
        knowledge_base: Lookup tables; the bundled tables when omitted
        config: Power constants; defaults when omitted

    Returns:
        Total watts, rounded up
    """
    return PowerEstimator(knowledge_base, config).estimate(build).total_watts
