"""Static LED module and power supply catalog.

The catalog is read-only lookup data. Placement only needs a module's
``modules_per_foot`` density; the engineering helpers use wattage, voltage
and run length.
"""

from pydantic import BaseModel, ConfigDict, Field

from ledlayout.exceptions import CatalogLookupError


class ModuleDimensions(BaseModel):
    """Physical module size in millimetres."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class ModuleInstallation(BaseModel):
    """Installation density and electrical run limits."""

    model_config = ConfigDict(frozen=True)

    modules_per_foot: float = Field(gt=0)
    max_run_length: int | None = Field(
        default=None,
        ge=1,
        description="Maximum modules on one circuit",
    )


class LEDModule(BaseModel):
    """A single LED module SKU."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    voltage: int = Field(gt=0)
    watts_per_module: float = Field(gt=0)
    lumens_per_module: float = Field(ge=0)
    color_temperature: str
    dimensions: ModuleDimensions
    installation: ModuleInstallation


class PowerSupply(BaseModel):
    """A constant-voltage power supply SKU."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    voltage: int = Field(gt=0)
    max_watts: float = Field(gt=0)
    input_voltage: str
    waterproof: bool = True


MODULE_CATALOG: tuple[LEDModule, ...] = (
    LEDModule(
        id="tetra-max-mini-24v",
        name="Tetra MAX 24V Mini",
        voltage=24,
        watts_per_module=0.31,
        lumens_per_module=50,
        color_temperature="7100K",
        dimensions=ModuleDimensions(length=50, width=14, height=10),
        installation=ModuleInstallation(modules_per_foot=4, max_run_length=300),
    ),
    LEDModule(
        id="tetra-max-small-24v",
        name="Tetra MAX 24V Small",
        voltage=24,
        watts_per_module=0.4,
        lumens_per_module=65,
        color_temperature="7100K",
        dimensions=ModuleDimensions(length=60, width=15, height=11),
        installation=ModuleInstallation(modules_per_foot=3, max_run_length=240),
    ),
    LEDModule(
        id="tetra-max-medium-24v",
        name="Tetra MAX 24V Medium",
        voltage=24,
        watts_per_module=0.5,
        lumens_per_module=82,
        color_temperature="7100K",
        dimensions=ModuleDimensions(length=70, width=17, height=12),
        installation=ModuleInstallation(modules_per_foot=2.5, max_run_length=190),
    ),
    LEDModule(
        id="tetra-max-large-24v",
        name="Tetra MAX 24V Large",
        voltage=24,
        watts_per_module=0.7,
        lumens_per_module=115,
        color_temperature="7100K",
        dimensions=ModuleDimensions(length=85, width=19, height=13),
        installation=ModuleInstallation(modules_per_foot=2, max_run_length=140),
    ),
)

# Sorted by ascending capacity; PSU selection relies on this order.
PSU_CATALOG: tuple[PowerSupply, ...] = (
    PowerSupply(id="geps-24-20", name="GEPS 24V 20W", voltage=24, max_watts=20, input_voltage="90-264V"),
    PowerSupply(id="geps-24-60", name="GEPS 24V 60W", voltage=24, max_watts=60, input_voltage="90-264V"),
    PowerSupply(id="geps-24-100", name="GEPS 24V 100W", voltage=24, max_watts=100, input_voltage="108-305V"),
    PowerSupply(id="geps-24-180", name="GEPS 24V 180W", voltage=24, max_watts=180, input_voltage="108-305V"),
    PowerSupply(id="geps-24-300", name="GEPS 24V 300W", voltage=24, max_watts=300, input_voltage="108-305V"),
)

DEFAULT_MODULE_ID = MODULE_CATALOG[0].id


def get_module(sku: str) -> LEDModule:
    """Look up an LED module by SKU.

    Args:
        sku: Module identifier, e.g. "tetra-max-small-24v"

    Returns:
        The catalog entry

    Raises:
        CatalogLookupError: If no module has this SKU
    """
    for module in MODULE_CATALOG:
        if module.id == sku:
            return module
    raise CatalogLookupError("module", sku)


def get_power_supply(sku: str) -> PowerSupply:
    """Look up a power supply by SKU.

    Raises:
        CatalogLookupError: If no power supply has this SKU
    """
    for psu in PSU_CATALOG:
        if psu.id == sku:
            return psu
    raise CatalogLookupError("power supply", sku)
