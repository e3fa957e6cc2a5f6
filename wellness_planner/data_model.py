# data_model.py

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union

# --- Client Intake Models ---

@dataclass
class ClientProfile:
    name: str = ""
    age: Union[int, str] = ""          # "" when unanswered
    gender: str = ""                   # "Masculino", "Femenino", "Otro" or ""
    phone: str = ""
    email: str = ""
    occupation: str = ""
    activity_level: str = ""           # e.g., "Sedentario", "Muy Activo"

    main_goal: str = ""                # one of HEALTH_GOALS
    priority_goal_details: Optional[str] = None

    diet_type: str = ""
    custom_diet_type: Optional[str] = None   # only when diet_type == "Otra"
    meal_regularity: str = ""
    water_intake: str = ""
    exercise_frequency: str = ""
    exercise_type: str = ""
    sleep_hours: Union[int, str] = ""
    sleep_quality: str = ""            # "Mala", "Regular", "Buena" or ""

    common_symptoms: List[str] = field(default_factory=list)  # de-duplicated, order kept for display
    medical_conditions: str = ""
    current_medications: str = ""
    additional_info: Optional[str] = None


# --- Catalog Models ---

@dataclass
class Product:
    id: str
    name: str
    price: float
    category: str                      # aligns with one of HEALTH_GOALS
    description: str = ""
    tags: List[str] = field(default_factory=list)   # lowercase keywords
    benefits: List[str] = field(default_factory=list)
    key_ingredients: List[str] = field(default_factory=list)
    suggested_usage: str = ""
    expected_results: str = ""
    image_url: str = ""
    points: Optional[int] = None       # reward points per purchase
    video_url: Optional[str] = None


@dataclass
class ScoredProduct:
    product: Product
    score: int = 0


# --- Output Models ---

@dataclass
class RankedRecommendation:
    main_product: Product
    complementary_products: List[Product] = field(default_factory=list)  # at most 2, by descending score
    scores: Dict[str, int] = field(default_factory=dict)                  # product id -> score


@dataclass
class Recommendation:
    client_name: str
    main_goal: str
    main_product: Product
    complementary_products: List[Product]
    lifestyle_tips: str
