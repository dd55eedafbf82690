"""
Core data models for the PC Build Validator.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class ComponentCategory(Enum):
    """The eight fixed component slots of a build."""
    CPU = "cpu"
    GPU = "gpu"
    RAM = "ram"
    MOTHERBOARD = "motherboard"
    STORAGE = "storage"
    PSU = "psu"
    CASE = "case"
    COOLING = "cooling"

    @property
    def label(self) -> str:
        """Display name used in findings and reports."""
        return _CATEGORY_LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> 'ComponentCategory':
        """
        Resolve a category from a slot name or a common alias.

        Args:
            name: Category name such as "CPU", "mobo" or "power-supply"

        Returns:
            Matching ComponentCategory

        Raises:
            ValueError: If the name is not a known category or alias
        """
        if isinstance(name, cls):
            return name
        key = str(name or "").strip().lower().replace("_", "-")
        if key in CATEGORY_ALIASES:
            return CATEGORY_ALIASES[key]
        raise ValueError(f"Unknown component category: {name!r}")


_CATEGORY_LABELS = {
    ComponentCategory.CPU: "CPU",
    ComponentCategory.GPU: "GPU",
    ComponentCategory.RAM: "RAM",
    ComponentCategory.MOTHERBOARD: "Motherboard",
    ComponentCategory.STORAGE: "Storage",
    ComponentCategory.PSU: "PSU",
    ComponentCategory.CASE: "Case",
    ComponentCategory.COOLING: "Cooling",
}

CATEGORY_ALIASES = {
    "cpu": ComponentCategory.CPU,
    "processor": ComponentCategory.CPU,
    "gpu": ComponentCategory.GPU,
    "video-card": ComponentCategory.GPU,
    "graphics-card": ComponentCategory.GPU,
    "ram": ComponentCategory.RAM,
    "memory": ComponentCategory.RAM,
    "motherboard": ComponentCategory.MOTHERBOARD,
    "mobo": ComponentCategory.MOTHERBOARD,
    "mainboard": ComponentCategory.MOTHERBOARD,
    "storage": ComponentCategory.STORAGE,
    "ssd": ComponentCategory.STORAGE,
    "hdd": ComponentCategory.STORAGE,
    "psu": ComponentCategory.PSU,
    "power-supply": ComponentCategory.PSU,
    "case": ComponentCategory.CASE,
    "chassis": ComponentCategory.CASE,
    "cooling": ComponentCategory.COOLING,
    "cooler": ComponentCategory.COOLING,
    "cpu-cooler": ComponentCategory.COOLING,
}

# Categories every usable build needs
ESSENTIAL_CATEGORIES: Tuple[ComponentCategory, ...] = (
    ComponentCategory.CPU,
    ComponentCategory.MOTHERBOARD,
    ComponentCategory.RAM,
    ComponentCategory.STORAGE,
)


@dataclass
class Component:
    """A catalog component with its free-text vendor specifications."""
    name: str
    brand: Optional[str]
    category: ComponentCategory
    price: float = 0.0
    specifications: Dict[str, Any] = field(default_factory=dict)
    model: Optional[str] = None
    component_id: Optional[str] = None
    original_price: Optional[float] = None

    def __post_init__(self):
        """Normalize category and tolerate a missing specifications map."""
        self.category = ComponentCategory.from_name(self.category)
        if self.specifications is None:
            self.specifications = {}

    def spec(self, *keys: str) -> Any:
        """Return the first non-empty specification value among keys."""
        for key in keys:
            value = self.specifications.get(key)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
        return None

    @property
    def display_name(self) -> str:
        return self.model or self.name


@dataclass
class Build:
    """A build: at most one component per category slot."""
    name: str = "Untitled build"
    components: Dict[ComponentCategory, Component] = field(default_factory=dict)

    @classmethod
    def from_components(cls, components: Mapping[Any, Optional[Component]], name: str = "Untitled build") -> 'Build':
        """
        Create a build from a slot mapping, skipping empty slots.

        Args:
            components: Mapping of category (enum or name) to optional Component
            name: Build name

        Returns:
            Build instance
        """
        build = cls(name=name)
        for key, component in components.items():
            if component is None:
                continue
            category = ComponentCategory.from_name(key)
            if component.category != category:
                raise ValueError(
                    f"Component '{component.name}' is a {component.category.label}, "
                    f"not a {category.label}"
                )
            build.components[category] = component
        return build

    def attach(self, component: Component) -> None:
        """Place a component in its slot, replacing any previous one."""
        self.components[component.category] = component

    def detach(self, category: ComponentCategory) -> Optional[Component]:
        """Empty a slot and return the component that was in it."""
        return self.components.pop(ComponentCategory.from_name(category), None)

    def get(self, category: ComponentCategory) -> Optional[Component]:
        return self.components.get(category)

    @property
    def filled_slots(self) -> List[ComponentCategory]:
        """Filled categories in canonical slot order."""
        return [category for category in ComponentCategory if category in self.components]

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def total_price(self) -> float:
        return round(sum(c.price or 0 for c in self.components.values()), 2)

    @property
    def original_total_price(self) -> float:
        return round(sum((c.original_price or c.price or 0) for c in self.components.values()), 2)

    @property
    def total_savings(self) -> float:
        return round(self.original_total_price - self.total_price, 2)

    @property
    def total_discount_percent(self) -> int:
        original = self.original_total_price
        if original <= 0:
            return 0
        return int(round((original - self.total_price) / original * 100))

    @property
    def completion_percentage(self) -> int:
        # Half-up rounding: one slot of eight is 13%
        return int(self.component_count * 100 / len(ComponentCategory) + 0.5)

    @property
    def required_components_complete(self) -> bool:
        return all(category in self.components for category in ESSENTIAL_CATEGORIES)


class Severity(Enum):
    """Severity of a compatibility finding."""
    ISSUE = "issue"      # blocking
    WARNING = "warning"  # advisory


@dataclass(frozen=True)
class Finding:
    """A single graded result emitted by a compatibility rule."""
    severity: Severity
    message: str
    rule: str

    @classmethod
    def issue(cls, rule: str, message: str) -> 'Finding':
        return cls(Severity.ISSUE, message, rule)

    @classmethod
    def warning(cls, rule: str, message: str) -> 'Finding':
        return cls(Severity.WARNING, message, rule)


@dataclass(frozen=True)
class PowerEstimate:
    """Estimated system power draw with a per-component breakdown."""
    total_watts: int
    base_watts: int
    breakdown: Tuple[Tuple[ComponentCategory, float], ...] = ()

    def watts_for(self, category: ComponentCategory) -> Optional[float]:
        for entry_category, watts in self.breakdown:
            if entry_category == category:
                return watts
        return None


@dataclass(frozen=True)
class CompatibilityReport:
    """
    Immutable compatibility verdict for one evaluation of a build.

    Issues and warnings are derived from the graded findings, so
    is_compatible is always equivalent to "no issues".
    """
    findings: Tuple[Finding, ...]
    estimated_wattage: int
    last_checked: datetime = field(compare=False)

    @property
    def issues(self) -> List[str]:
        return [f.message for f in self.findings if f.severity is Severity.ISSUE]

    @property
    def warnings(self) -> List[str]:
        return [f.message for f in self.findings if f.severity is Severity.WARNING]

    @property
    def is_compatible(self) -> bool:
        return not self.issues

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape consumed by clients."""
        checked = self.last_checked
        if checked.tzinfo is not None:
            checked = checked.astimezone(timezone.utc).replace(tzinfo=None)
        return {
            "isCompatible": self.is_compatible,
            "warnings": self.warnings,
            "issues": self.issues,
            "estimatedWattage": self.estimated_wattage,
            "lastChecked": checked.isoformat(timespec="milliseconds") + "Z",
        }


@dataclass
class BuildAnalysis:
    """Complete analysis result handed to the reporters."""
    build: Build
    report: CompatibilityReport
    power: PowerEstimate
    processing_time: float = 0.0
    source_file: Optional[str] = None
