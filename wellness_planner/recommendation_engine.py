# wellness_planner/recommendation_engine.py
from __future__ import annotations
from typing import List, Optional, Sequence

from wellness_planner.data_model import ClientProfile, Product, ScoredProduct, RankedRecommendation
from wellness_planner.product_scorer import score_product

MAX_COMPLEMENTARY = 2
MIN_COMPLEMENTARY_SCORE = 10  # complementary products need a score strictly above this
DEFAULT_PRODUCT_ID = "vita_xtra_t"


class EmptyCatalogError(Exception):
    pass


def _rank(scored: List[ScoredProduct]) -> List[ScoredProduct]:
    # sorted() is stable, so equal scores keep catalog order
    return sorted(scored, key=lambda sp: sp.score, reverse=True)


def _fallback_recommendation(
    products: Sequence[Product],
    scored: List[ScoredProduct],
    default_product_id: Optional[str],
) -> RankedRecommendation:
    fallback = next((p for p in products if p.id == default_product_id), None) or products[0]
    complementary = [p for p in products if p.id != fallback.id][:MAX_COMPLEMENTARY]
    return RankedRecommendation(
        main_product=fallback,
        complementary_products=complementary,
        scores={sp.product.id: sp.score for sp in scored},
    )


def generate_recommendation(
    profile: ClientProfile,
    products: Sequence[Product],
    default_product_id: Optional[str] = DEFAULT_PRODUCT_ID,
) -> RankedRecommendation:
    """
    Scores every catalog product against the client profile and returns:
      - main_product: the top-ranked product
      - complementary_products: up to 2 next-ranked products scoring above 10

    When nothing matched (top score exactly 0) the product with
    `default_product_id` (or the first catalog entry) becomes the main product and
    the complementary list is the next two catalog entries, unfiltered.
    Raises EmptyCatalogError if there is nothing to recommend.
    """
    if not products:
        raise EmptyCatalogError("No products available to recommend.")

    scored = [ScoredProduct(product=p, score=score_product(profile, p)) for p in products]
    ranked = _rank(scored)

    if ranked[0].score == 0:
        return _fallback_recommendation(products, scored, default_product_id)

    main = ranked[0].product
    complementary = [
        sp.product for sp in ranked[1:]
        if sp.score > MIN_COMPLEMENTARY_SCORE and sp.product.id != main.id
    ][:MAX_COMPLEMENTARY]

    return RankedRecommendation(
        main_product=main,
        complementary_products=complementary,
        scores={sp.product.id: sp.score for sp in scored},
    )
