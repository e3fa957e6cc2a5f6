# wellness_planner/intake_form.py

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel, to_snake

from wellness_planner.data_model import ClientProfile

# -----------------------------
# Enumerations
# -----------------------------
GENDERS = ["Masculino", "Femenino", "Otro"]
ACTIVITY_LEVELS = ["Sedentario", "Ligero", "Moderado", "Activo", "Muy Activo"]
DIET_TYPES = [
    "Equilibrada", "Rica en frutas/verduras", "Rica en procesados/dulces",
    "Vegetariana", "Vegana", "Otra",
]
MEAL_REGULARITY = ["Regular", "Irregular"]
WATER_INTAKE = ["Bajo (<1L)", "Moderado (1-2L)", "Alto (>2L)"]
EXERCISE_FREQUENCY = ["Nunca", "1-2 veces/sem", "3-4 veces/sem", "5+ veces/sem"]
SLEEP_QUALITY = ["Mala", "Regular", "Buena"]

HEALTH_GOALS = [
    "Control de Peso", "Energía", "Digestión", "Sistema Inmunológico",
    "Estrés/Ánimo", "Sueño", "Salud Articular/Muscular", "Rendimiento Deportivo",
    "Belleza", "Desintoxicación", "Salud Femenina",
]

SYMPTOM_OPTIONS = [
    "Fatiga o cansancio constante",
    "Problemas digestivos (hinchazón, estreñimiento)",
    "Dolor articular o rigidez",
    "Estrés o ansiedad",
    "Dificultad para dormir",
    "Defensas bajas o resfriados frecuentes",
    "Antojos de dulce",
    "Retención de líquidos",
    "Piel opaca o envejecimiento prematuro",
    "Falta de concentración",
    "Molestias menstruales o premenstruales",
]

ENUMERATED_FIELDS: Dict[str, List[str]] = {
    "gender": GENDERS,
    "activity_level": ACTIVITY_LEVELS,
    "main_goal": HEALTH_GOALS,
    "diet_type": DIET_TYPES,
    "meal_regularity": MEAL_REGULARITY,
    "water_intake": WATER_INTAKE,
    "exercise_frequency": EXERCISE_FREQUENCY,
    "sleep_quality": SLEEP_QUALITY,
}


@dataclass
class FormStep:
    id: int
    name: str
    fields: List[str]


FORM_STEPS: List[FormStep] = [
    FormStep(1, "Datos Personales", ["name", "age", "gender", "phone", "email", "occupation", "activity_level"]),
    FormStep(2, "Objetivo de Salud", ["main_goal", "priority_goal_details"]),
    FormStep(3, "Estilo de Vida", [
        "diet_type", "custom_diet_type", "meal_regularity", "water_intake",
        "exercise_frequency", "exercise_type", "sleep_hours", "sleep_quality",
    ]),
    FormStep(4, "Salud General", ["common_symptoms", "medical_conditions", "current_medications", "additional_info"]),
]

REQUIRED_FIELDS = {
    "name", "age", "gender", "phone", "email", "activity_level", "main_goal",
    "diet_type", "meal_regularity", "water_intake", "exercise_frequency",
    "sleep_hours", "sleep_quality",
}

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-().]+$")

# -----------------------------
# Field checks
# -----------------------------

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else None


def _check_age(value: Any, answers: Dict[str, Any]) -> Optional[str]:
    age = _as_int(value)
    if age is None or not 1 <= age <= 120:
        return "La edad debe ser un número entre 1 y 120."
    return None


def _check_sleep_hours(value: Any, answers: Dict[str, Any]) -> Optional[str]:
    hours = _as_int(value)
    if hours is None or not 0 <= hours <= 24:
        return "Las horas de sueño deben estar entre 0 y 24."
    return None


def _check_email(value: Any, answers: Dict[str, Any]) -> Optional[str]:
    if not EMAIL_PATTERN.match(str(value).strip()):
        return "Ingresa un correo electrónico válido."
    return None


def _check_phone(value: Any, answers: Dict[str, Any]) -> Optional[str]:
    text = str(value).strip()
    digits = re.sub(r"\D", "", text)
    if not PHONE_PATTERN.match(text) or not 7 <= len(digits) <= 15:
        return "Ingresa un número de teléfono válido (7 a 15 dígitos)."
    return None


def _check_symptoms(value: Any, answers: Dict[str, Any]) -> Optional[str]:
    unknown = [s for s in value or [] if s not in SYMPTOM_OPTIONS]
    if unknown:
        return f"Síntomas no reconocidos: {', '.join(unknown)}."
    return None


FIELD_CHECKS: Dict[str, Callable[[Any, Dict[str, Any]], Optional[str]]] = {
    "age": _check_age,
    "sleep_hours": _check_sleep_hours,
    "email": _check_email,
    "phone": _check_phone,
    "common_symptoms": _check_symptoms,
}


def _check_field(field_name: str, answers: Dict[str, Any]) -> Optional[str]:
    value = answers.get(field_name)

    if field_name == "custom_diet_type":
        if answers.get("diet_type") == "Otra" and _is_blank(value):
            return "Describe tu tipo de dieta."
        return None

    if _is_blank(value):
        return "Este campo es obligatorio." if field_name in REQUIRED_FIELDS else None

    options = ENUMERATED_FIELDS.get(field_name)
    if options is not None and value not in options:
        return f"Selecciona una opción válida: {', '.join(options)}."

    check = FIELD_CHECKS.get(field_name)
    return check(value, answers) if check else None


def normalize_answers(answers: Dict[str, Any]) -> Dict[str, Any]:
    """Accepts camelCase (front end) or snake_case keys."""
    return {to_snake(key): value for key, value in (answers or {}).items()}


def get_step(step_id: int) -> FormStep:
    for step in FORM_STEPS:
        if step.id == step_id:
            return step
    raise ValueError(f"Unknown form step: {step_id}")


def validate_step(step_id: int, answers: Dict[str, Any]) -> Dict[str, str]:
    """
    Validates the fields of one wizard step.
    Returns field -> error message; an empty dict means the step can advance.
    """
    step = get_step(step_id)
    normalized = normalize_answers(answers)
    errors = {}
    for field_name in step.fields:
        message = _check_field(field_name, normalized)
        if message:
            errors[field_name] = message
    return errors


def validate_all_steps(answers: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for step in FORM_STEPS:
        errors.update(validate_step(step.id, answers))
    return errors


def form_options() -> Dict[str, Any]:
    return {
        "genders": GENDERS,
        "activity_levels": ACTIVITY_LEVELS,
        "health_goals": HEALTH_GOALS,
        "diet_types": DIET_TYPES,
        "meal_regularity": MEAL_REGULARITY,
        "water_intake": WATER_INTAKE,
        "exercise_frequency": EXERCISE_FREQUENCY,
        "sleep_quality": SLEEP_QUALITY,
        "symptom_options": SYMPTOM_OPTIONS,
        "steps": [{"id": s.id, "name": s.name, "fields": s.fields} for s in FORM_STEPS],
    }


# -----------------------------
# Full submission model
# -----------------------------
class ClientIntake(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    age: int
    gender: str
    phone: str
    email: str
    occupation: str = ""
    activity_level: str

    main_goal: str
    priority_goal_details: Optional[str] = None

    diet_type: str
    custom_diet_type: Optional[str] = None
    meal_regularity: str
    water_intake: str
    exercise_frequency: str
    exercise_type: str = ""
    sleep_hours: int
    sleep_quality: str

    common_symptoms: List[str] = Field(default_factory=list)
    medical_conditions: str = ""
    current_medications: str = ""
    additional_info: Optional[str] = None

    @field_validator("common_symptoms")
    @classmethod
    def dedupe_symptoms(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def check_answers(self) -> "ClientIntake":
        errors = validate_all_steps(self.model_dump())
        if errors:
            details = "; ".join(f"{field}: {message}" for field, message in errors.items())
            raise ValueError(details)
        return self

    def to_profile(self) -> ClientProfile:
        return ClientProfile(**self.model_dump())

    def webhook_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        payload["commonSymptoms"] = ", ".join(self.common_symptoms)
        return payload
