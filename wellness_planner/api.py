import os
import logging
from dataclasses import asdict
from typing import Any, Dict, List
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, BackgroundTasks
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()

from wellness_planner.catalog import product_catalog
from wellness_planner.data_model import Product, Recommendation
from wellness_planner.intake_form import ClientIntake, form_options, validate_step
from wellness_planner.plan_builder import build_recommendation_with_scores
from wellness_planner.plan_export import build_plan_document, export_filename, format_tips_html
from wellness_planner.recommendation_engine import EmptyCatalogError
from wellness_planner.tips_generator import generate_lifestyle_tips
from wellness_planner.webhook_notifier import notify_form_submission

app = FastAPI(title="Wellness Planner")

# -----------------------------
# Middleware
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
@app.head("/")
def root():
    return {"message": "Welcome to the Wellness Planner API"}

logger = logging.getLogger("uvicorn.error")

EMPTY_CATALOG_DETAIL = (
    "No hay productos disponibles para generar tu recomendación. "
    "Inténtalo de nuevo más tarde o contacta a soporte."
)


# -----------------------------
# Intake form
# -----------------------------
@app.get("/form/options")
def get_form_options():
    return form_options()


@app.post("/form/steps/{step_id}/validate")
def validate_form_step(step_id: int, answers: Dict[str, Any]):
    try:
        errors = validate_step(step_id, answers)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown form step: {step_id}")
    return {"valid": not errors, "errors": errors}


# -----------------------------
# Recommendations
# -----------------------------
def _recommend(intake: ClientIntake):
    profile = intake.to_profile()
    try:
        return build_recommendation_with_scores(
            profile,
            product_catalog.all_products(),
            default_product_id=product_catalog.default_product_id,
            tips_provider=generate_lifestyle_tips,
        )
    except EmptyCatalogError as e:
        logger.error(f"Recommendation failed: {e}")
        raise HTTPException(status_code=503, detail=EMPTY_CATALOG_DETAIL)
    except Exception as e:
        logger.error(f"Error generating recommendation: {e}", exc_info=True)
        raise HTTPException(status_code=500,
                            detail="Internal Server Error. Please check your input and try again.")


@app.post("/recommend", response_model=dict)
def recommend(intake: ClientIntake, background_tasks: BackgroundTasks):
    logger.info(f"Received intake: goal={intake.main_goal!r}, symptoms={len(intake.common_symptoms)}")

    recommendation, ranked = _recommend(intake)
    background_tasks.add_task(notify_form_submission, intake.webhook_payload())

    out = asdict(recommendation)
    out["lifestyle_tips_html"] = format_tips_html(recommendation.lifestyle_tips)
    out["scores"] = ranked.scores
    return out


# -----------------------------
# Export of an already shown recommendation
# -----------------------------
class ShownProduct(BaseModel):
    id: str


class ShownRecommendation(BaseModel):
    client_name: str
    main_goal: str
    main_product: ShownProduct
    complementary_products: List[ShownProduct] = Field(default_factory=list)
    lifestyle_tips: str


class ExportRequest(BaseModel):
    intake: ClientIntake
    recommendation: ShownRecommendation


def _catalog_product(product_id: str) -> Product:
    product = product_catalog.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    return product


@app.post("/recommend/export", response_class=PlainTextResponse)
def export_recommendation(payload: ExportRequest):
    # renders the recommendation the client was shown; no new tips request
    shown = payload.recommendation
    recommendation = Recommendation(
        client_name=shown.client_name,
        main_goal=shown.main_goal,
        main_product=_catalog_product(shown.main_product.id),
        complementary_products=[_catalog_product(p.id) for p in shown.complementary_products],
        lifestyle_tips=shown.lifestyle_tips,
    )
    document = build_plan_document(recommendation, payload.intake.to_profile())
    filename = export_filename(recommendation.client_name)
    return PlainTextResponse(
        document,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


# -----------------------------
# Other routers
# -----------------------------
from wellness_planner.catalog_router import router as catalog_router
app.include_router(catalog_router)
