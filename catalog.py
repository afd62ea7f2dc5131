"""
Product catalog loading.

The catalog is a JSON array of products in storefront shape:
``{"handle", "title", "options": [...], "variants": [...] | {"nodes": [...]}}``.
Entries without a handle get one derived from their title.
"""

import logging
import re
from pathlib import Path

import orjson
from pydantic import ValidationError

from models import Product

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert a product title to a URL-safe handle."""
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def load_products(catalog_file: Path) -> list[Product]:
    """Read and validate a catalog file.

    Invalid entries and repeated handles are skipped with a warning.
    Raises FileNotFoundError when the file does not exist.
    """
    if not catalog_file.exists():
        raise FileNotFoundError(
            f"{catalog_file} not found. Set VARIANT_SELECTOR_CATALOG_FILE or pass --catalog."
        )

    raw: list[dict] = orjson.loads(catalog_file.read_bytes())

    products: list[Product] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object catalog entry: %r", entry)
            continue
        if not entry.get("handle") and entry.get("title"):
            entry = {**entry, "handle": slugify(entry["title"])}
        try:
            product = Product.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping invalid catalog entry %r", entry.get("handle"), exc_info=True)
            continue

        if product.handle in seen:
            logger.warning("Duplicate handle %r, keeping the first entry", product.handle)
            continue
        seen.add(product.handle)
        products.append(product)

    logger.info("Loaded %d products from %s", len(products), catalog_file)
    return products


def find_product(products: list[Product], handle: str) -> Product | None:
    return next((p for p in products if p.handle == handle), None)
