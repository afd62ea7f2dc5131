"""Shared fixtures: a small catalog written to disk."""

from pathlib import Path

import orjson
import pytest


def _variant(vid: str, available: bool, **options: str) -> dict:
    return {
        "id": vid,
        "availableForSale": available,
        "selectedOptions": [{"name": n, "value": v} for n, v in options.items()],
    }


CATALOG = [
    {
        "handle": "classic-tee",
        "title": "Classic Tee",
        "options": [
            {"name": "Color", "values": ["Red", "Blue"]},
            {"name": "Size", "values": ["S", "M"]},
            {"name": "Material", "values": ["Cotton"]},
        ],
        "variants": {
            "nodes": [
                _variant("tee-red-s", False, Color="Red", Size="S", Material="Cotton"),
                _variant("tee-red-m", True, Color="Red", Size="M", Material="Cotton"),
                _variant("tee-blue-s", True, Color="Blue", Size="S", Material="Cotton"),
                _variant("tee-blue-m", False, Color="Blue", Size="M", Material="Cotton"),
            ]
        },
    },
    {
        "title": "Canvas Tote",
        "options": [{"name": "Size", "values": ["Standard", "Large"]}],
        "variants": [
            _variant("tote-standard", True, Size="Standard"),
            _variant("tote-large", False, Size="Large"),
            {"id": "tote-broken", "selectedOptions": [{"name": "Size"}]},
        ],
    },
    {"handle": "broken", "title": 5},
    {"handle": "classic-tee", "title": "Classic Tee (duplicate)"},
    "not a product",
]


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "products.json"
    path.write_bytes(orjson.dumps(CATALOG))
    return path
