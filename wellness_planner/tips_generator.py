# wellness_planner/tips_generator.py
from __future__ import annotations
from typing import Dict, List, Optional
import os, logging

import openai
from openai import OpenAI
from wellness_planner.data_model import ClientProfile

logger = logging.getLogger("uvicorn.error")

MISSING_KEY_MESSAGE = (
    "La generación de consejos de estilo de vida no está disponible en este momento "
    "(clave API no configurada). Por favor, consulta a tu asesor de bienestar."
)
EMPTY_RESPONSE_MESSAGE = (
    "No se pudieron generar consejos de estilo de vida en este momento. "
    "Intenta ser más específico en tu información o consulta a tu asesor."
)
ERROR_PREFIX = "Hubo un problema al generar los consejos de estilo de vida. "
INVALID_KEY_MESSAGE = ERROR_PREFIX + "La clave API no es válida. Por favor, verifica la configuración."
QUOTA_MESSAGE = ERROR_PREFIX + "Se ha alcanzado la cuota de uso. Inténtalo más tarde."
RETRY_MESSAGE = ERROR_PREFIX + "Por favor, inténtalo de nuevo más tarde."

DEFAULT_TIPS_TIMEOUT_SECONDS = 30.0

SYSTEM_PROMPT = (
    "Eres un coach de bienestar y nutrición, experto y empático. Tu rol es complementar "
    "una recomendación de productos nutracéuticos con consejos de estilo de vida."
)


def tips_timeout_seconds() -> float:
    try:
        return float(os.getenv("TIPS_TIMEOUT_SECONDS", DEFAULT_TIPS_TIMEOUT_SECONDS))
    except ValueError:
        return DEFAULT_TIPS_TIMEOUT_SECONDS


def _value_or(value, default: str = "No especificado") -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return str(value)


def _diet_details(profile: ClientProfile) -> str:
    if profile.diet_type == "Otra":
        return _value_or(profile.custom_diet_type)
    return _value_or(profile.diet_type)


def build_tips_prompt(profile: ClientProfile) -> str:
    symptoms = ", ".join(profile.common_symptoms) if profile.common_symptoms else "Ninguno reportado"

    return f"""
Basándote en la siguiente información de un cliente, proporciona entre 3 y 5 consejos de estilo de vida personalizados, breves, accionables y motivadores.
Estos consejos deben ayudarle a alcanzar su objetivo principal de salud.

**Reglas Estrictas:**
1.  **NO menciones, sugieras ni hagas alusión a ningún producto comercial, suplemento, vitamina o nutracéutico específico** (de ninguna marca). Tu foco es 100% en hábitos.
2.  Enfócate únicamente en cambios de hábitos (alimentación, ejercicio, sueño, manejo de estrés, hidratación).
3.  Usa un lenguaje positivo y de apoyo. Formatea cada consejo como un punto separado. Utiliza markdown para resaltar palabras clave con negritas (**ejemplo**).
4.  Comienza cada consejo con un verbo de acción (Ej: **Prioriza**, **Incorpora**, **Intenta**, **Asegúrate**).
5.  Finaliza con una frase motivadora corta y original.

**Información del Cliente:**
- **Objetivo Principal:** {profile.main_goal}
- **Detalles del Objetivo:** {_value_or(profile.priority_goal_details)}
- **Edad:** {profile.age}
- **Género:** {profile.gender}
- **Nivel de Actividad:** {profile.activity_level}
- **Hábitos Alimenticios:** Dieta {_diet_details(profile)}, comidas de forma {profile.meal_regularity}.
- **Hidratación:** Consumo de agua {profile.water_intake}.
- **Ejercicio:** {profile.exercise_frequency}, tipo: {_value_or(profile.exercise_type)}.
- **Descanso:** Duerme {profile.sleep_hours} horas, calidad de sueño {profile.sleep_quality}.
- **Síntomas Comunes:** {symptoms}.

Analiza cómo sus hábitos actuales impactan su objetivo de **"{profile.main_goal}"** y ofrece consejos prácticos para mejorar.
""".strip()


def _build_messages(profile: ClientProfile) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_tips_prompt(profile)},
    ]


def generate_lifestyle_tips(
    profile: ClientProfile,
    model: Optional[str] = None,
    temperature: float = 0.75,
    top_p: float = 0.95,
) -> str:
    """
    Asks the language model for 3-5 habit-focused tips for the client.
    Never raises: every failure is logged and mapped to a fixed Spanish message,
    so product recommendations can still be shown.
    """
    if not os.getenv("OPENAI_API_KEY"):
        logger.error("OPENAI_API_KEY environment variable is not set.")
        return MISSING_KEY_MESSAGE

    model = model or os.getenv("TIPS_MODEL", "gpt-4o-mini")

    try:
        # same deadline the plan builder waits for
        client = OpenAI(timeout=tips_timeout_seconds(), max_retries=0)
        resp = client.chat.completions.create(
            model=model,
            messages=_build_messages(profile),
            temperature=temperature,
            top_p=top_p,
            max_tokens=800,
        )
    except openai.AuthenticationError as e:
        logger.error(f"Tips generation rejected the API key: {e}")
        return INVALID_KEY_MESSAGE
    except openai.RateLimitError as e:
        logger.error(f"Tips generation hit the usage quota: {e}")
        return QUOTA_MESSAGE
    except openai.OpenAIError as e:
        logger.error(f"Error calling the language model for tips: {e}", exc_info=True)
        return RETRY_MESSAGE

    content = resp.choices[0].message.content if resp.choices else None
    if not content or not content.strip():
        logger.info("Language model returned no tips text.")
        return EMPTY_RESPONSE_MESSAGE

    logger.info(f"Generated lifestyle tips with {model} for goal '{profile.main_goal}'")
    return content.strip()
