"""
FastAPI server for variant selection.

Loads the product catalog into memory at startup and serves:
- GET  /api/products                → slim product cards
- GET  /api/products/{handle}       → product detail with resolved option states
- POST /api/variant-selector        → option states for caller-supplied data
- GET  /health                      → liveness and catalog size
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

from catalog import load_products
from config import get_settings
from models import OptionValueState, Product, ProductOption, ProductVariant, ResolvedOption
from resolver import resolve_option_states, selected_variant
from variants import first_available_variant, normalize_variants

logger = logging.getLogger("server")

# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ProductCard(BaseModel):
    """Slim payload for catalog listings."""

    handle: str
    title: str
    option_count: int
    variant_count: int
    first_available_variant_id: str | None


class ProductDetail(BaseModel):
    """Full payload for a product page, resolved against the request URL."""

    handle: str
    title: str
    options: list[ResolvedOption]
    selected_variant: ProductVariant | None
    first_available_variant: ProductVariant | None


class VariantSelectorRequest(BaseModel):
    """Arbitrary product data to resolve; nothing is looked up in the catalog."""

    options: list[ProductOption]
    variants: list[Any] | dict[str, Any] | None = None
    url: str = "/"
    product_path: str | None = None


def _as_resolved(states: dict[str, list[OptionValueState]]) -> list[ResolvedOption]:
    return [ResolvedOption(name=name, values=values) for name, values in states.items()]


# ---------------------------------------------------------------------------
# Data loading
# ---------------------------------------------------------------------------

# In-memory stores populated at startup
_products_by_handle: dict[str, Product] = {}
_product_cards: list[ProductCard] = []


def _load_catalog(catalog_file: Path) -> None:
    """Load the catalog into memory and build lookups."""
    global _products_by_handle, _product_cards

    by_handle: dict[str, Product] = {}
    cards: list[ProductCard] = []

    for product in load_products(catalog_file):
        by_handle[product.handle] = product
        first = first_available_variant(product.variants)
        cards.append(
            ProductCard(
                handle=product.handle,
                title=product.title,
                option_count=len(product.options),
                variant_count=len(normalize_variants(product.variants)),
                first_available_variant_id=first.id if first else None,
            )
        )

    _products_by_handle = by_handle
    _product_cards = cards
    logger.info("Serving %d products", len(cards))


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    _load_catalog(get_settings().catalog_file)
    yield


settings = get_settings()

app = FastAPI(
    title="Variant Selector API",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    max_age=86400,
)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok", "products": len(_product_cards)}


@app.get("/api/products", response_model=list[ProductCard])
async def list_products():
    """Return slim product cards for the catalog."""
    return _product_cards


@app.get("/api/products/{handle}", response_model=ProductDetail)
async def get_product(handle: str, request: Request):
    """Return a product with its option states resolved for this request's query string."""
    product = _products_by_handle.get(handle)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    current_url = str(request.url)
    product_path = f"{get_settings().product_path_prefix}/{handle}"
    states = resolve_option_states(product.options, product.variants, current_url, product_path=product_path)

    return ProductDetail(
        handle=product.handle,
        title=product.title,
        options=_as_resolved(states),
        selected_variant=selected_variant(product.options, product.variants, current_url),
        first_available_variant=first_available_variant(product.variants),
    )


@app.post("/api/variant-selector", response_model=list[ResolvedOption])
async def resolve_variant_selector(body: VariantSelectorRequest):
    """Resolve option states for product data supplied in the request body."""
    states = resolve_option_states(body.options, body.variants, body.url, product_path=body.product_path)
    return _as_resolved(states)
