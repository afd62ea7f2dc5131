from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Storefront payloads use camelCase; accept both spellings on input.
# The API and CLI dump by alias, so clients get camelCase back.
_ALIASED = ConfigDict(populate_by_name=True)


class SelectedOption(BaseModel):
    """One concrete choice for one option (e.g. Color=Red)."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class ProductOption(BaseModel):
    """A dimension along which a product varies (e.g., size, color)."""

    name: str
    values: list[str] = []  # ordered list of all possible values

    @field_validator("values")
    @classmethod
    def dedupe_values(cls, v: list[str]) -> list[str]:
        # First occurrence wins
        return list(dict.fromkeys(v))


class ProductVariant(BaseModel):
    """A specific purchasable configuration of a product."""

    model_config = _ALIASED

    available_for_sale: bool = Field(False, alias="availableForSale")
    selected_options: list[SelectedOption] = Field(default_factory=list, alias="selectedOptions")
    id: str | None = None
    sku: str | None = None
    title: str | None = None

    def as_combination(self) -> dict[str, str] | None:
        """Return the variant's options as a name -> value mapping.

        None when an option name appears more than once, since such a variant
        has no single well-defined combination.
        """
        combination = {o.name: o.value for o in self.selected_options}
        if len(combination) != len(self.selected_options):
            return None
        return combination


class VariantConnection(BaseModel):
    """GraphQL connection wrapper: the variants live under ``nodes``."""

    nodes: list[ProductVariant] = []


class OptionValueState(BaseModel):
    """Navigable state of a single option value, ready for a rendering layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    path: str  # relative URL that applies this value
    is_active: bool = Field(False, alias="isActive")
    is_available: bool = Field(True, alias="isAvailable")


class ResolvedOption(BaseModel):
    """A free option together with the states of all its values."""

    name: str
    values: list[OptionValueState]


class Product(BaseModel):
    """A catalog entry: everything needed to resolve its variant selector."""

    handle: str
    title: str
    options: list[ProductOption] = []
    # Kept raw: malformed entries are dropped by the variant index, not here
    variants: list[Any] = []

    @field_validator("variants", mode="before")
    @classmethod
    def unwrap_connection(cls, v):
        # Catalog exports may keep the storefront's {"nodes": [...]} shape
        if isinstance(v, dict):
            return v.get("nodes") or []
        return v or []
