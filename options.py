import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from models import ProductOption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoldedOptions:
    """Product options split by whether the shopper can actually choose them.

    ``free_options`` have more than one value and are exposed for selection.
    ``fixed_defaults`` maps every single-valued option to its only value; those
    are never shown but are folded into every generated link.
    """

    options: tuple[ProductOption, ...] = ()
    free_options: tuple[ProductOption, ...] = ()
    fixed_defaults: dict[str, str] = field(default_factory=dict)

    @property
    def option_names(self) -> list[str]:
        """All usable option names in declaration order."""
        return [o.name for o in self.options]

    @property
    def free_names(self) -> list[str]:
        return [o.name for o in self.free_options]


def fold_defaults(options: Iterable[Any] | None) -> FoldedOptions:
    """Partition options into free options and fixed defaults, keeping order.

    Options without values are ignored. If a name is declared twice, the first
    declaration wins.
    """
    kept: list[ProductOption] = []
    seen: set[str] = set()
    for raw in options or []:
        option = _coerce_option(raw)
        if option is None or not option.values:
            logger.debug("Ignoring option without values: %r", raw)
            continue
        if option.name in seen:
            logger.debug("Ignoring repeated option %r", option.name)
            continue
        seen.add(option.name)
        kept.append(option)

    return FoldedOptions(
        options=tuple(kept),
        free_options=tuple(o for o in kept if len(o.values) > 1),
        fixed_defaults={o.name: o.values[0] for o in kept if len(o.values) == 1},
    )


def _coerce_option(raw: Any) -> ProductOption | None:
    if isinstance(raw, ProductOption):
        return raw
    try:
        return ProductOption.model_validate(raw, from_attributes=not isinstance(raw, Mapping))
    except ValidationError:
        return None
