# plan_export.py

import os
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from wellness_planner.data_model import ClientProfile, Product, Recommendation

DOCUMENT_TITLE = "Plan de Bienestar"
DISCLAIMER = (
    "Este plan es una sugerencia y no sustituye el consejo médico profesional. "
    "La constancia es clave para ver resultados."
)


@dataclass
class AdvisorContact:
    name: str
    phone: str


def advisor_from_env() -> AdvisorContact:
    return AdvisorContact(
        name=os.getenv("ADVISOR_NAME", "Tu Asesora de Bienestar"),
        phone=os.getenv("ADVISOR_PHONE", ""),
    )


def format_price_line(product: Product, is_main: bool) -> str:
    """
    e.g. "Producto Principal: Flex - $52.00 (34 Puntos)"
    """
    label = "Producto Principal:" if is_main else "Producto Complementario:"
    points = f" ({product.points} Puntos)" if product.points else ""
    return f"{label} {product.name} - ${product.price:.2f}{points}"


def clean_tips_lines(tips: str) -> List[str]:
    """Plain-text tips: leading '- ' becomes a bullet, markdown bold is dropped."""
    return [re.sub(r"^- ", "• ", line).replace("**", "") for line in tips.split("\n")]


def format_tips_html(tips: str) -> str:
    html = "<br />".join(re.sub(r"^- ", "&#8226; ", line) for line in tips.split("\n"))
    return re.sub(r"\*\*(.*?)\*\*", r"<strong>\1</strong>", html)


def _client_summary(profile: ClientProfile) -> List[str]:
    lines = [
        f"Edad: {profile.age} | Género: {profile.gender} | Nivel Actividad: {profile.activity_level}",
        f"Contacto: {profile.email} | {profile.phone}",
        f"Objetivo Principal: {profile.main_goal}",
    ]
    if profile.common_symptoms:
        lines.append(f"Síntomas Reportados: {', '.join(profile.common_symptoms)}")
    return lines


def _product_block(product: Product, is_main: bool) -> List[str]:
    return [
        format_price_line(product, is_main),
        f"    Beneficios: {', '.join(product.benefits)}",
        f"    Uso Sugerido: {product.suggested_usage}",
    ]


def build_plan_document(
    recommendation: Recommendation,
    profile: ClientProfile,
    advisor: Optional[AdvisorContact] = None,
) -> str:
    """
    Shareable text version of the plan, section by section:
    header, client summary, products, lifestyle tips, advisor contact, disclaimer.
    """
    advisor = advisor or advisor_from_env()

    lines = [
        DOCUMENT_TITLE,
        f"Preparado para: {recommendation.client_name}",
        "",
        "Resumen del Cliente:",
        *_client_summary(profile),
        "",
        "Recomendación de Productos:",
        *_product_block(recommendation.main_product, True),
    ]
    for product in recommendation.complementary_products:
        lines.extend(_product_block(product, False))

    lines += ["", "Consejos de Estilo de Vida:", *clean_tips_lines(recommendation.lifestyle_tips)]

    contact = f"{advisor.name} - Tel: {advisor.phone}" if advisor.phone else advisor.name
    lines += ["", "-" * 60, "Contacta a tu Asesora de Bienestar:", contact, "", DISCLAIMER]

    return "\n".join(lines) + "\n"


def export_filename(client_name: str, on_date: Optional[date] = None) -> str:
    on_date = on_date or date.today()
    safe_name = re.sub(r"\s+", "_", client_name.strip()) or "cliente"
    return f"Recomendacion_{safe_name}_{on_date.isoformat()}.txt"
