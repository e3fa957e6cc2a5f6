# wellness_planner/catalog_router.py

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException

from wellness_planner.catalog import product_catalog

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(category: Optional[str] = None):
    if category:
        products = product_catalog.products_by_category(category)
    else:
        products = product_catalog.all_products()
    return {
        "version": product_catalog.version,
        "categories": product_catalog.categories(),
        "products": [asdict(p) for p in products],
    }


@router.get("/{product_id}")
def read_product(product_id: str):
    product = product_catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return asdict(product)
