# wellness_planner/plan_builder.py
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Callable, Optional, Sequence, Tuple
import logging

from wellness_planner.data_model import ClientProfile, Product, RankedRecommendation, Recommendation
from wellness_planner.recommendation_engine import generate_recommendation, DEFAULT_PRODUCT_ID
from wellness_planner.tips_generator import generate_lifestyle_tips, tips_timeout_seconds

logger = logging.getLogger("uvicorn.error")

FALLBACK_TIPS = (
    "No pudimos generar consejos de estilo de vida en este momento. "
    "Enfócate en las recomendaciones de productos y en prácticas generales de bienestar."
)

TipsProvider = Callable[[ClientProfile], str]


def build_recommendation_with_scores(
    profile: ClientProfile,
    products: Sequence[Product],
    default_product_id: Optional[str] = DEFAULT_PRODUCT_ID,
    tips_provider: TipsProvider = generate_lifestyle_tips,
    tips_timeout: Optional[float] = None,
) -> Tuple[Recommendation, RankedRecommendation]:
    """
    Scores the catalog while the tips request runs in a worker thread, then
    waits for the tips (bounded by tips_timeout). Tips failures degrade to
    FALLBACK_TIPS; EmptyCatalogError from scoring propagates.
    """
    timeout = tips_timeout_seconds() if tips_timeout is None else tips_timeout

    executor = ThreadPoolExecutor(max_workers=1)
    try:
        tips_future = executor.submit(tips_provider, profile)

        try:
            ranked = generate_recommendation(profile, products, default_product_id)
        except Exception:
            tips_future.cancel()
            raise

        try:
            lifestyle_tips = tips_future.result(timeout=timeout)
        except FuturesTimeoutError:
            logger.error(f"Lifestyle tips timed out after {timeout}s; using fallback text.")
            lifestyle_tips = FALLBACK_TIPS
        except Exception as e:
            logger.error(f"Error generating lifestyle tips: {e}", exc_info=True)
            lifestyle_tips = FALLBACK_TIPS
    finally:
        # don't wait on a hung tips call
        executor.shutdown(wait=False)

    if not lifestyle_tips:
        lifestyle_tips = FALLBACK_TIPS

    recommendation = Recommendation(
        client_name=profile.name,
        main_goal=profile.main_goal,
        main_product=ranked.main_product,
        complementary_products=list(ranked.complementary_products),
        lifestyle_tips=lifestyle_tips,
    )
    return recommendation, ranked


def build_recommendation(
    profile: ClientProfile,
    products: Sequence[Product],
    default_product_id: Optional[str] = DEFAULT_PRODUCT_ID,
    tips_provider: TipsProvider = generate_lifestyle_tips,
    tips_timeout: Optional[float] = None,
) -> Recommendation:
    recommendation, _ = build_recommendation_with_scores(
        profile, products, default_product_id, tips_provider, tips_timeout
    )
    return recommendation
