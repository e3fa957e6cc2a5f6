# catalog.py

import json
import os
from typing import List, Optional, Tuple
from pathlib import Path

from wellness_planner.data_model import Product


class CatalogFormatError(Exception):
    pass


def dict_to_product(data: dict) -> Product:
    for key in ("id", "name", "category"):
        if not str(data.get(key) or "").strip():
            raise CatalogFormatError(f"Product entry is missing '{key}': {data!r}")

    price = float(data.get("price", 0))
    points = data.get("points")
    if price < 0:
        raise CatalogFormatError(f"Product '{data['id']}' has a negative price.")
    if points is not None and points < 0:
        raise CatalogFormatError(f"Product '{data['id']}' has negative points.")

    tags = [str(t).strip().lower() for t in data.get("tags", []) if str(t).strip()]

    return Product(
        id=data["id"],
        name=data["name"],
        price=price,
        category=data["category"],
        description=data.get("description", ""),
        tags=tags,
        benefits=list(data.get("benefits", [])),
        key_ingredients=list(data.get("key_ingredients", [])),
        suggested_usage=data.get("suggested_usage", ""),
        expected_results=data.get("expected_results", ""),
        image_url=data.get("image_url", ""),
        points=points,
        video_url=data.get("video_url"),
    )


class ProductCatalog:
    _instance = None
    _catalog_path = Path(__file__).parent / "product_catalog.json"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ProductCatalog, cls).__new__(cls)
            cls._instance._products = None
            cls._instance._version = ""
            cls._instance._default_product_id = None
            cls._instance.load_catalog()
        return cls._instance

    def load_catalog(self, force_reload: bool = False) -> Tuple[Product, ...]:
        if self._products is None or force_reload:
            path = Path(os.getenv("CATALOG_PATH") or self._catalog_path)
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)

            products: List[Product] = []
            seen = set()
            for entry in raw.get("products", []):
                product = dict_to_product(entry)
                if product.id in seen:
                    raise CatalogFormatError(f"Duplicate product id '{product.id}'.")
                seen.add(product.id)
                products.append(product)

            self._products = tuple(products)
            self._version = str(raw.get("version", ""))
            self._default_product_id = raw.get("default_product_id")
        return self._products

    @property
    def version(self) -> str:
        return self._version

    @property
    def default_product_id(self) -> Optional[str]:
        return os.getenv("DEFAULT_PRODUCT_ID") or self._default_product_id

    def all_products(self) -> Tuple[Product, ...]:
        return self._products

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def products_by_category(self, category: str) -> List[Product]:
        category = category.lower()
        return [p for p in self._products if p.category.lower() == category]

    def categories(self) -> List[str]:
        # dict keeps first-appearance order
        return list(dict.fromkeys(p.category for p in self._products))


# Singleton instance to use throughout the app
product_catalog = ProductCatalog()


# Convenience functions

def load_catalog(force_reload: bool = False) -> Tuple[Product, ...]:
    return product_catalog.load_catalog(force_reload)

def get_product(product_id: str) -> Optional[Product]:
    return product_catalog.get_product(product_id)
