"""
Variant index: normalizes a variants source and answers combination lookups.

A source is either a plain sequence of variants or a GraphQL-style
connection exposing them under ``nodes``. Both shapes are flattened once,
here, so nothing downstream needs to know which one the caller had.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from models import ProductVariant, VariantConnection

logger = logging.getLogger(__name__)

CombinationKey = tuple[tuple[str, str], ...]


def combination_key(combination: Mapping[str, str]) -> CombinationKey:
    """Canonical hashable form of a combination: pairs sorted by option name."""
    return tuple(sorted(combination.items()))


def normalize_variants(source: Any) -> list[ProductVariant]:
    """Flatten a variants source into an ordered list of validated variants.

    Accepts None, a sequence, a VariantConnection, or anything with ``nodes``
    (attribute or mapping key). Entries that fail validation are dropped.
    """
    nodes = _unwrap(source)
    variants: list[ProductVariant] = []
    for i, node in enumerate(nodes):
        variant = _coerce_variant(node)
        if variant is None:
            logger.debug("Dropping malformed variant at index %d", i)
            continue
        variants.append(variant)
    return variants


def first_available_variant(source: Any) -> ProductVariant | None:
    """Return the first variant, in source order, that is available for sale."""
    for variant in normalize_variants(source):
        if variant.available_for_sale:
            return variant
    return None


class VariantIndex:
    """Exact-combination lookups over one product's variants.

    When ``option_names`` is given, a variant must name exactly those options
    to take part in any lookup.
    """

    def __init__(self, source: Any, option_names: Iterable[str] | None = None):
        self.option_names = frozenset(option_names) if option_names is not None else None
        self.variants = normalize_variants(source)

        self._by_key: dict[CombinationKey, list[ProductVariant]] = {}
        self._combinations: list[tuple[dict[str, str], ProductVariant]] = []
        for variant in self.variants:
            combination = self._well_formed(variant)
            if combination is None:
                continue
            self._by_key.setdefault(combination_key(combination), []).append(variant)
            self._combinations.append((combination, variant))

    def __len__(self) -> int:
        return len(self.variants)

    def matches(self, combination: Mapping[str, str]) -> ProductVariant | None:
        """Return the single variant whose options equal ``combination`` exactly.

        None when nothing matches, and also when several variants claim the same
        combination: duplicates are reported as a miss rather than guessed at.
        """
        found = self._by_key.get(combination_key(combination), [])
        if len(found) > 1:
            logger.debug("Ambiguous combination %s: %d variants", dict(combination), len(found))
            return None
        return found[0] if found else None

    def candidates(self, combination: Mapping[str, str]) -> list[ProductVariant]:
        """Well-formed variants agreeing with every pinned option in ``combination``."""
        return [
            variant
            for options, variant in self._combinations
            if all(options.get(name) == value for name, value in combination.items())
        ]

    def is_available(self, combination: Mapping[str, str]) -> bool:
        """Whether choosing ``combination`` can lead to something purchasable.

        Without usable variant data the answer is always yes. A combination covering
        every option must match exactly one variant; a partial one is available
        when any variant agreeing on the pinned options is for sale.
        """
        if not self.variants:
            return True
        if self.option_names is not None and set(combination) == self.option_names:
            variant = self.matches(combination)
            return variant is not None and variant.available_for_sale
        return any(v.available_for_sale for v in self.candidates(combination))

    def _well_formed(self, variant: ProductVariant) -> dict[str, str] | None:
        combination = variant.as_combination()
        if combination is None:
            return None
        if self.option_names is not None and set(combination) != self.option_names:
            return None
        return combination


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _unwrap(source: Any) -> Sequence[Any]:
    if source is None:
        return []
    if isinstance(source, VariantConnection):
        return source.nodes
    if isinstance(source, Mapping):
        return source.get("nodes") or []
    if isinstance(source, (str, bytes)):
        return []
    if hasattr(source, "nodes"):
        return source.nodes or []
    if isinstance(source, Sequence):
        return source
    return []


def _coerce_variant(node: Any) -> ProductVariant | None:
    if isinstance(node, ProductVariant):
        return node
    from_attributes = not isinstance(node, Mapping)
    # Every field has a default, so any object would validate from attributes
    if from_attributes and not (hasattr(node, "selectedOptions") or hasattr(node, "selected_options")):
        return None
    try:
        return ProductVariant.model_validate(node, from_attributes=from_attributes)
    except ValidationError:
        return None
