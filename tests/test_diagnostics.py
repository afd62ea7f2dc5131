"""Tests for the catalog variant-data report."""

from diagnostics import diagnose_product, has_problems
from models import Product


def _variant(available: bool, **options: str) -> dict:
    return {
        "availableForSale": available,
        "selectedOptions": [{"name": n, "value": v} for n, v in options.items()],
    }


def test_diagnose_product_reports_problems() -> None:
    """Verify dropped, mismatched, duplicate and uncovered data are all reported."""
    product = Product.model_validate(
        {
            "handle": "tee",
            "title": "Tee",
            "options": [
                {"name": "Size", "values": ["S", "M", "L"]},
                {"name": "Material", "values": ["Cotton"]},
            ],
            "variants": [
                _variant(True, Size="S", Material="Cotton"),
                _variant(True, Size="S", Material="Cotton"),
                _variant(False, Color="Red"),
                {"selectedOptions": [{"name": "Size"}]},
            ],
        }
    )
    report = diagnose_product(product)

    assert report["free"] == ["Size"]
    assert report["fixed"] == {"Material": "Cotton"}
    assert report["supplied"] == 4
    assert report["valid"] == 3
    assert report["available"] == 2
    assert report["mismatched"] == [2]
    assert report["duplicates"] == ["Material=Cotton, Size=S"]
    assert report["uncovered"] == ["Size=M", "Size=L"]
    assert has_problems(report)


def test_diagnose_clean_product() -> None:
    """Verify complete, unique variant data reports no problems."""
    product = Product.model_validate(
        {
            "handle": "tote",
            "title": "Tote",
            "options": [{"name": "Size", "values": ["S", "M"]}],
            "variants": {"nodes": [_variant(True, Size="S"), _variant(False, Size="M")]},
        }
    )
    report = diagnose_product(product)
    assert not has_problems(report)


def test_diagnose_product_without_variants() -> None:
    """Verify a product without variant data has nothing uncovered."""
    product = Product(handle="card", title="Card", options=[{"name": "Amount", "values": ["25", "50"]}])
    report = diagnose_product(product)
    assert report["uncovered"] == []
    assert not has_problems(report)
