from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from fastapi import APIRouter, FastAPI, HTTPException, Query  # noqa: E402
from fastapi.encoders import jsonable_encoder  # noqa: E402

from .config import PLAN_TEMPLATES, FlowName  # noqa: E402
from .models.analysis import RentalAnalysisResult, RentalCalculations, SuggestedRent  # noqa: E402
from .models.property import RentalAnalysisForm  # noqa: E402
from .services.analysis_service import _get_default_service, analyze_rental  # noqa: E402
from .utils.logging import get_logger, kv  # noqa: E402

LOGGER = get_logger("api")

app = FastAPI(title="Rental profitability engine")
router = APIRouter(prefix="/api")


@router.post("/analysis", response_model=RentalAnalysisResult)
def analysis(form: RentalAnalysisForm, flow: FlowName = Query("brokerage")):
    try:
        return analyze_rental(form, flow=flow)
    except ValueError as exc:
        LOGGER.warning("analysis_rejected %s", kv(flow=flow, error=exc))
        raise HTTPException(400, detail=str(exc))


@router.post("/calculations", response_model=RentalCalculations)
def calculations(form: RentalAnalysisForm, flow: FlowName = Query("brokerage")):
    try:
        return _get_default_service().calculations(form, flow=flow)
    except ValueError as exc:
        raise HTTPException(400, detail=str(exc))


@router.post("/suggest-rent", response_model=SuggestedRent)
def suggest_rent(form: RentalAnalysisForm, flow: FlowName = Query("brokerage")):
    return _get_default_service().suggest_initial_rent(form, flow=flow)


@router.get("/plan-templates")
def plan_templates():
    payload = {
        name: [
            {
                "id": spec.plan_id,
                "name": spec.name,
                "service_level": spec.service_level,
                "marketing_duration_days": spec.marketing_duration_days,
                "first_reduction_day": spec.first_reduction_day,
                "schedule": [{"day": step.day, "percentage_reduction": step.reduction} for step in spec.steps],
            }
            for spec in template.plans
        ]
        for name, template in PLAN_TEMPLATES.items()
    }
    return jsonable_encoder(payload)


@router.get("/health")
def health(): return {"status": "ok"}


app.include_router(router)
