from wellness_planner.data_model import ClientProfile
from wellness_planner.intake_form import (
    GENDERS, ACTIVITY_LEVELS, HEALTH_GOALS, DIET_TYPES, MEAL_REGULARITY,
    WATER_INTAKE, EXERCISE_FREQUENCY, SLEEP_QUALITY, SYMPTOM_OPTIONS,
)
import random
from typing import List, Optional

FREE_TEXT_SNIPPETS = [
    "", "Quiero bajar de peso antes del verano", "Me siento sin energía por las tardes",
    "Tengo mucho estrés en el trabajo", "Busco mejorar mi digestión y la hinchazón",
    "Entreno para un maratón y necesito recuperación", "Duermo mal desde hace meses",
]


def _choice_or_blank(rng: random.Random, options: List[str]) -> str:
    # roughly one answer in ten left blank
    return "" if rng.random() < 0.1 else rng.choice(options)


def generate_random_client(index: int, rng: Optional[random.Random] = None) -> ClientProfile:
    rng = rng or random.Random()
    diet_type = _choice_or_blank(rng, DIET_TYPES)

    return ClientProfile(
        name=f"Cliente {index}",
        age=rng.randint(18, 75),
        gender=_choice_or_blank(rng, GENDERS),
        phone=f"+51 9{rng.randint(10000000, 99999999)}",
        email=f"cliente{index}@example.com",
        activity_level=_choice_or_blank(rng, ACTIVITY_LEVELS),
        main_goal=_choice_or_blank(rng, HEALTH_GOALS),
        priority_goal_details=rng.choice(FREE_TEXT_SNIPPETS),
        diet_type=diet_type,
        custom_diet_type="Keto" if diet_type == "Otra" else None,
        meal_regularity=_choice_or_blank(rng, MEAL_REGULARITY),
        water_intake=_choice_or_blank(rng, WATER_INTAKE),
        exercise_frequency=_choice_or_blank(rng, EXERCISE_FREQUENCY),
        sleep_hours=rng.randint(3, 10),
        sleep_quality=_choice_or_blank(rng, SLEEP_QUALITY),
        common_symptoms=rng.sample(SYMPTOM_OPTIONS, k=rng.randint(0, 4)),
        additional_info=rng.choice(FREE_TEXT_SNIPPETS),
    )


def generate_multiple_clients(count: int, seed: Optional[int] = None) -> List[ClientProfile]:
    rng = random.Random(seed)
    return [generate_random_client(i, rng) for i in range(count)]
