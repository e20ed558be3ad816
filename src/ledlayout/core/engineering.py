"""Electrical figures for a layout: power load, PSU sizing and bill of materials."""

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from ledlayout.catalog import PSU_CATALOG, LEDModule, PowerSupply

# Fraction of rated capacity a supply is loaded to when counting units
PSU_LOAD_FACTOR = 0.8
# Headroom required when recommending a single supply
PSU_HEADROOM = 1.2
DEFAULT_MODULES_PER_CIRCUIT = 100


class BOMCategory(str, Enum):
    LIGHTING = "Lighting"
    POWER = "Power"
    HOUSING = "Housing"


@dataclass(frozen=True)
class PowerAnalysis:
    """Electrical load of a set of modules.

    Attributes:
        total_watts: Combined module wattage
        total_amps: Current draw at the module voltage
        modules_per_circuit: Longest run before a new circuit is needed
    """

    total_watts: float
    total_amps: float
    modules_per_circuit: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BOMItem:
    sku: str
    name: str
    quantity: int
    unit: str
    category: BOMCategory

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


def calculate_power_load(module_count: int, module: LEDModule) -> PowerAnalysis:
    """Total wattage and current for ``module_count`` modules."""
    total_watts = module_count * module.watts_per_module
    return PowerAnalysis(
        total_watts=total_watts,
        total_amps=total_watts / module.voltage,
        modules_per_circuit=module.installation.max_run_length or DEFAULT_MODULES_PER_CIRCUIT,
    )


def recommend_power_supply(
    total_watts: float,
    catalog: Sequence[PowerSupply] = PSU_CATALOG,
) -> PowerSupply | None:
    """Smallest supply that carries the load with headroom.

    Args:
        total_watts: Load to power
        catalog: Supplies in ascending capacity order

    Returns:
        First supply with ``max_watts >= total_watts * 1.2``, or None if
        no single supply is large enough
    """
    required = total_watts * PSU_HEADROOM
    for psu in catalog:
        if psu.max_watts >= required:
            return psu
    return None


def power_supply_quantity(total_watts: float, psu: PowerSupply) -> int:
    """Units of ``psu`` needed when each is loaded to 80% of its rating."""
    return max(1, math.ceil(total_watts / (psu.max_watts * PSU_LOAD_FACTOR)))


def generate_bom(module: LEDModule, module_count: int, psu: PowerSupply | None) -> list[BOMItem]:
    """Bill of materials for a layout.

    Lists the modules and, when a supply is given, the number of supply
    units needed for the modules' combined load.
    """
    items = [
        BOMItem(
            sku=module.id,
            name=module.name,
            quantity=module_count,
            unit="pcs",
            category=BOMCategory.LIGHTING,
        )
    ]
    if psu is not None:
        total_watts = calculate_power_load(module_count, module).total_watts
        items.append(
            BOMItem(
                sku=psu.id,
                name=psu.name,
                quantity=power_supply_quantity(total_watts, psu),
                unit="pcs",
                category=BOMCategory.POWER,
            )
        )
    return items
