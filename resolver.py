"""
Variant selector resolution.

For every option a shopper can choose and every value of that option, work
out the link that applies the value, whether it is the current choice, and
whether it leads to something purchasable.

Pipeline per call: parse the location, index the variants, fold
single-valued options into defaults, then synthesize one state per
(option, value). Nothing is cached between calls; identical inputs always
produce identical paths.
"""

import logging
from typing import Any
from urllib.parse import urlencode

from models import OptionValueState, ProductOption, ProductVariant
from options import FoldedOptions, fold_defaults
from parser import current_selection, parse_location, passthrough_params
from variants import VariantIndex

logger = logging.getLogger(__name__)


def resolve_option_states(
    options: Any,
    variants: Any,
    current_url: Any,
    product_path: str | None = None,
) -> dict[str, list[OptionValueState]]:
    """Resolve the selector state of every free option.

    Args:
        options: product options (models or plain mappings).
        variants: a list of variants, a ``{"nodes": [...]}`` connection, or None.
        current_url: the location being rendered (string, URL or request).
        product_path: pathname for generated links; defaults to the current one.

    Returns:
        Option name -> one OptionValueState per value, in declaration order.
        Single-valued options are never keys.
    """
    folded = fold_defaults(options)
    location = parse_location(current_url)
    names = folded.option_names

    selection = current_selection(location, names)
    passthrough = passthrough_params(location, names)
    index = VariantIndex(variants, names)
    base = product_path if product_path is not None else location.pathname

    states: dict[str, list[OptionValueState]] = {}
    for option in folded.free_options:
        option_states = []
        for value in option.values:
            combination = _combination(folded, selection, option, value)
            option_states.append(
                OptionValueState(
                    value=value,
                    path=_build_path(base, _query_pairs(folded, combination, option, passthrough)),
                    is_active=selection.get(option.name) == value,
                    is_available=index.is_available(combination),
                )
            )
        states[option.name] = option_states

    logger.debug(
        "Resolved %d free option(s), %d fixed default(s), %d variant(s)",
        len(states),
        len(folded.fixed_defaults),
        len(index),
    )
    return states


def selected_variant(options: Any, variants: Any, current_url: Any) -> ProductVariant | None:
    """Return the variant matching the location's complete selection.

    Fixed defaults fill in single-valued options. None when some free option
    is still unselected, or when the selection is ambiguous.
    """
    folded = fold_defaults(options)
    location = parse_location(current_url)
    selection = current_selection(location, folded.free_names)

    combination = dict(folded.fixed_defaults)
    combination.update(selection)
    if set(combination) != set(folded.option_names):
        return None
    return VariantIndex(variants, folded.option_names).matches(combination)


# ---------------------------------------------------------------------------
# Combination and path synthesis
# ---------------------------------------------------------------------------


def _combination(
    folded: FoldedOptions,
    selection: dict[str, str],
    option: ProductOption,
    value: str,
) -> dict[str, str]:
    """Defaults, then the other free options' current picks, then option=value.

    Free options with no current pick are left out: they are unconstrained.
    """
    combination = dict(folded.fixed_defaults)
    for other in folded.free_options:
        if other.name != option.name and other.name in selection:
            combination[other.name] = selection[other.name]
    combination[option.name] = value
    return combination


def _query_pairs(
    folded: FoldedOptions,
    combination: dict[str, str],
    option: ProductOption,
    passthrough: list[tuple[str, str]],
) -> list[tuple[str, str]]:
    # Order: the chosen option, other free picks, fixed defaults, unrelated params
    pairs = [(option.name, combination[option.name])]
    pairs.extend(
        (other.name, combination[other.name])
        for other in folded.free_options
        if other.name != option.name and other.name in combination
    )
    pairs.extend(folded.fixed_defaults.items())
    pairs.extend(passthrough)
    return pairs


def _build_path(base: str, pairs: list[tuple[str, str]]) -> str:
    return f"{base}?{urlencode(pairs)}"
