# product_scorer.py

from typing import Callable, Dict, List, Tuple
from wellness_planner.data_model import ClientProfile, Product

SPORTS_CATEGORY = "Rendimiento Deportivo"
WOMENS_HEALTH_CATEGORY = "Salud Femenina"
HIGH_ACTIVITY_LEVELS = ("Activo", "Muy Activo")
PROCESSED_DIET = "Rica en procesados/dulces"

# Symptom keyword -> product tag that earns the symptom-specific bonus
SPECIFIC_SYMPTOM_BONUSES: List[Tuple[str, str, int]] = [
    ("digestivo", "digestión", 25),
    ("articular", "articulaciones", 25),
    ("menstrual", "salud femenina", 30),
]

# A rule returns how many times it fires for a (profile, product) pair;
# booleans count as 0 or 1.
Rule = Callable[[ClientProfile, Product], int]


def _goal_match(profile: ClientProfile, product: Product) -> int:
    return product.category.lower() == (profile.main_goal or "").lower()


def _symptom_tag_overlap(profile: ClientProfile, product: Product) -> int:
    # One hit per symptom that contains at least one of the product tags
    return sum(
        1 for symptom in profile.common_symptoms or []
        if any(tag in symptom.lower() for tag in product.tags)
    )


def _specific_symptom_rule(keyword: str, tag: str) -> Rule:
    def rule(profile: ClientProfile, product: Product) -> int:
        if tag not in product.tags:
            return 0
        return sum(1 for symptom in profile.common_symptoms or [] if keyword in symptom)
    return rule


def _free_text_keywords(profile: ClientProfile, product: Product) -> int:
    client_text = f"{(profile.priority_goal_details or '').lower()} {(profile.additional_info or '').lower()}"
    return sum(1 for tag in product.tags if tag in client_text)


def _active_athlete(profile: ClientProfile, product: Product) -> int:
    return profile.activity_level in HIGH_ACTIVITY_LEVELS and product.category == SPORTS_CATEGORY


def _female_womens_health(profile: ClientProfile, product: Product) -> int:
    return profile.gender == "Femenino" and product.category == WOMENS_HEALTH_CATEGORY


def _poor_sleep(profile: ClientProfile, product: Product) -> int:
    return profile.sleep_quality == "Mala" and "sueño" in product.tags


def _processed_diet(profile: ClientProfile, product: Product) -> int:
    return profile.diet_type == PROCESSED_DIET and (
        "desintoxicación" in product.tags or "control de peso" in product.tags
    )


def _off_goal_sports(profile: ClientProfile, product: Product) -> int:
    return profile.main_goal != SPORTS_CATEGORY and product.category == SPORTS_CATEGORY


# Flat (rule, delta) table; every rule is independent and additive
SCORING_RULES: List[Tuple[Rule, int]] = [
    (_goal_match, 50),
    (_symptom_tag_overlap, 20),
    *[(_specific_symptom_rule(keyword, tag), bonus) for keyword, tag, bonus in SPECIFIC_SYMPTOM_BONUSES],
    (_free_text_keywords, 10),
    (_active_athlete, 30),
    (_female_womens_health, 30),
    (_poor_sleep, 25),
    (_processed_diet, 15),
    (_off_goal_sports, -10),
]


def score_product(profile: ClientProfile, product: Product) -> int:
    """
    Computes the integer relevance score of one product for a client:
      - Main goal vs. product category
      - Reported symptoms vs. product tags
      - Free-text goal details and additional info vs. product tags
      - Lifestyle and demographic adjustments
    Scores are not normalized and can be negative.
    """
    return sum(int(rule(profile, product)) * delta for rule, delta in SCORING_RULES)


def score_catalog(profile: ClientProfile, products: List[Product]) -> Dict[str, int]:
    """Product id -> score, in catalog order."""
    return {p.id: score_product(profile, p) for p in products}
