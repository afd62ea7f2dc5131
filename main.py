"""
Variant selector CLI.

Resolves the option states of one catalog product against a URL and prints
them, either as a table or as JSON:

    python main.py classic-tee --url "/products/classic-tee?Color=Red&ref=ad"
"""

import argparse
import logging
import sys
from pathlib import Path

import orjson

from catalog import find_product, load_products
from config import get_settings
from models import OptionValueState, Product
from resolver import resolve_option_states, selected_variant
from variants import first_available_variant


def resolve_product(product: Product, url: str) -> dict[str, list[OptionValueState]]:
    """Resolve a catalog product's option states for ``url``."""
    return resolve_option_states(product.options, product.variants, url)


def print_report(product: Product, url: str, states: dict[str, list[OptionValueState]]) -> None:
    """Print a per-option table of the resolved states."""
    print(f"\n{'=' * 70}")
    print(f"  {product.title} ({product.handle})")
    print(f"  URL: {url}")
    print(f"{'=' * 70}")

    if not states:
        print("\n  No selectable options.")

    for name, values in states.items():
        print(f"\n── {name} ──")
        print(f"  {'Value':<20} {'Active':>7} {'Avail':>7}  Path")
        print(f"  {'-' * 66}")
        for s in values:
            print(f"  {s.value:<20} {'yes' if s.is_active else '-':>7} "
                  f"{'yes' if s.is_available else 'no':>7}  {s.path}")

    variant = selected_variant(product.options, product.variants, url)
    first = first_available_variant(product.variants)
    print(f"\n  Selected variant:        {_describe(variant)}")
    print(f"  First available variant: {_describe(first)}")
    print()


def _describe(variant) -> str:
    if variant is None:
        return "-"
    combo = ", ".join(f"{o.name}={o.value}" for o in variant.selected_options)
    label = variant.id or variant.sku or variant.title or "variant"
    return f"{label} [{combo}] available={variant.available_for_sale}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve variant selector state for a catalog product.")
    parser.add_argument("handle", help="Product handle in the catalog")
    parser.add_argument("--url", default="/", help="Current location, query string included")
    parser.add_argument("--catalog", help="Path to the catalog JSON (defaults to settings)")
    parser.add_argument("--json", action="store_true", help="Print the states as JSON")
    args = parser.parse_args(argv)

    catalog_file = Path(args.catalog) if args.catalog else get_settings().catalog_file
    products = load_products(catalog_file)

    product = find_product(products, args.handle)
    if product is None:
        print(f"Product '{args.handle}' not found in {catalog_file}", file=sys.stderr)
        return 1

    states = resolve_product(product, args.url)

    if args.json:
        payload = {name: [s.model_dump(by_alias=True) for s in values] for name, values in states.items()}
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode() + "\n")
    else:
        print_report(product, args.url, states)
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main())
