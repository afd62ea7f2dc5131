"""
Diagnostic: check catalog variant data against each product's options.
Reports what makes the selector degrade (dropped or mismatched variants,
duplicate combinations, option values no variant covers).
"""

import argparse
from collections import Counter
from pathlib import Path

from catalog import load_products
from config import get_settings
from models import Product
from options import fold_defaults
from variants import combination_key, normalize_variants


def diagnose_product(product: Product) -> dict:
    folded = fold_defaults(product.options)
    names = set(folded.option_names)
    variants = normalize_variants(product.variants)

    report = {
        "handle": product.handle,
        "free": folded.free_names,
        "fixed": dict(folded.fixed_defaults),
        "supplied": len(product.variants),
        "valid": len(variants),
        "available": sum(1 for v in variants if v.available_for_sale),
        "mismatched": [],
        "duplicates": [],
        "uncovered": [],
    }

    keys: Counter = Counter()
    covered: set[tuple[str, str]] = set()
    for i, variant in enumerate(variants):
        combination = variant.as_combination()
        if combination is None or set(combination) != names:
            report["mismatched"].append(i)
            continue
        keys[combination_key(combination)] += 1
        covered.update(combination.items())

    report["duplicates"] = [
        ", ".join(f"{n}={v}" for n, v in key) for key, count in keys.items() if count > 1
    ]

    # Without variant data nothing is uncovered: everything resolves as available
    if variants:
        for option in folded.options:
            for value in option.values:
                if (option.name, value) not in covered:
                    report["uncovered"].append(f"{option.name}={value}")

    return report


def has_problems(report: dict) -> bool:
    return bool(
        report["supplied"] != report["valid"]
        or report["mismatched"]
        or report["duplicates"]
        or report["uncovered"]
    )


def main():
    parser = argparse.ArgumentParser(description="Check catalog variant data for selector problems.")
    parser.add_argument("--catalog", help="Path to the catalog JSON (defaults to settings)")
    args = parser.parse_args()

    catalog_file = Path(args.catalog) if args.catalog else get_settings().catalog_file
    products = load_products(catalog_file)
    print(f"Diagnosing {len(products)} products from {catalog_file}\n")

    all_reports = []
    for product in products:
        report = diagnose_product(product)
        all_reports.append(report)

        print(f"{'=' * 70}")
        print(f"  {report['handle']}")
        print(f"{'=' * 70}")
        print(f"  Free options: {report['free'] or '-'}")
        print(f"  Fixed defaults: {report['fixed'] or '-'}")
        print(
            f"  Variants: {report['supplied']} supplied | {report['valid']} valid | "
            f"{report['available']} available"
        )

        if report["mismatched"]:
            print(f"  Mismatched options (indices): {report['mismatched']}")
        if report["duplicates"]:
            print(f"  Duplicate combinations ({len(report['duplicates'])}):")
            for combo in report["duplicates"]:
                print(f"    {combo}")
        if report["uncovered"]:
            print(f"  Values without any variant: {report['uncovered']}")
        if not has_problems(report):
            print("\n  No problems found!")
        print()

    # Summary table
    print(f"\n{'=' * 70}")
    print("SUMMARY")
    print(f"{'=' * 70}")
    print(f"{'Product':<30} {'Dropped':>8} {'Mismatch':>9} {'Dupes':>6} {'Uncov':>6}")
    print("-" * 63)
    for r in all_reports:
        print(
            f"{r['handle'][:29]:<30} {r['supplied'] - r['valid']:>8} {len(r['mismatched']):>9} "
            f"{len(r['duplicates']):>6} {len(r['uncovered']):>6}"
        )


if __name__ == "__main__":
    main()
