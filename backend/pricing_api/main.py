import logging
import os
from dataclasses import asdict
from typing import Dict, List, Tuple

import pandas as pd
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from pricing_engine import (
    TEMPLATES,
    CalculationResult,
    CalculatorInputs,
    compute_projection,
    generate_monthly_usage,
    resolve_discounts,
    schedule_frame,
    static_usage,
    suggest_commitments,
    yearly_frame,
)
from pricing_engine.engine import SCHEDULE_COLUMNS, YEARLY_COLUMNS
from pricing_engine.presets import CURRENCY_PRICING, all_presets
from pricing_engine.usage import UsageGrid

from .errors import setup as setup_errors
from .models import (
    CalculateRequest,
    CalculateResponse,
    DiscountsModel,
    PartnerConfigModel,
    ScheduleRow,
    SuggestResponse,
    TotalsModel,
    YearlyRow,
)
from .utils_export import projection_to_pdf_bytes, projection_to_xlsx_bytes

log = logging.getLogger(__name__)

app = FastAPI(title="Commitment Calculator API", version="1.0.0")
setup_errors(app)

# CORS for local dev
origins = [o.strip() for o in os.getenv("FRONTEND_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",") if o.strip()]
koyeb = os.getenv("KOYEB_APP_DOMAIN")
if koyeb:
    origins.append(f"https://{koyeb}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _to_inputs(m: PartnerConfigModel) -> CalculatorInputs:
    average = getattr(m, "average_monthly_cost", 1200.0)
    template = getattr(m, "template", None)
    if template and "average_monthly_cost" not in m.model_fields_set:
        average = TEMPLATES[template].base_monthly_usage
    return CalculatorInputs(
        agency_tier=m.agency_tier, contract_type=m.contract_type,
        commitment_type=m.commitment_type, commitment_duration=m.commitment_duration,
        support_level=m.support_level, free_user_licenses=m.free_user_licenses,
        currency=m.currency, average_monthly_cost=average,
    )


def _usage_grid(m: CalculateRequest, inputs: CalculatorInputs) -> UsageGrid:
    if m.monthly_usage is not None:
        return static_usage(m.monthly_usage)
    return generate_monthly_usage(
        inputs.average_monthly_cost, m.variation_pattern, m.enable_variations, seed=m.seed
    )


def _run(m: CalculateRequest) -> Tuple[CalculatorInputs, CalculationResult]:
    inputs = _to_inputs(m)
    return inputs, compute_projection(inputs, _usage_grid(m, inputs), m.year_commitments)


_RATIO_COLUMNS = ("blended_discount", "average_blended_discount")


def _df_to_model_rows(df: pd.DataFrame, columns: Dict[str, str], model, decimals: int) -> List:
    df2 = df.rename(columns={label: attr for attr, label in columns.items()})
    # ratios keep four more places than money columns
    df2 = df2.round({c: decimals + 4 if c in _RATIO_COLUMNS else decimals for c in df2.columns})
    return [model(**row) for row in df2.to_dict(orient="records")]


def _to_response(result: CalculationResult, decimals: int) -> CalculateResponse:
    return CalculateResponse(
        discounts=DiscountsModel(**asdict(result.discounts)),
        totals=TotalsModel(
            total_cost=round(result.total_cost, decimals),
            total_savings=round(result.total_savings, decimals),
            average_monthly_cost=round(result.average_monthly_cost, decimals),
            # ratio, keep extra precision
            total_discount=round(result.total_discount, decimals + 4),
        ),
        yearly=_df_to_model_rows(yearly_frame(result), YEARLY_COLUMNS, YearlyRow, decimals),
        schedule=_df_to_model_rows(schedule_frame(result), SCHEDULE_COLUMNS, ScheduleRow, decimals),
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse("/docs")


@app.get("/presets")
def presets():
    return all_presets()


@app.post("/discounts", response_model=DiscountsModel)
def discounts(payload: PartnerConfigModel):
    return DiscountsModel(**asdict(resolve_discounts(_to_inputs(payload))))


@app.post("/calculate", response_model=CalculateResponse)
def calculate(payload: CalculateRequest):
    inputs, result = _run(payload)
    log.info(
        "calculate tier=%s contract=%s currency=%s total_cost=%.2f",
        inputs.agency_tier.value, inputs.contract_type.value,
        CURRENCY_PRICING[inputs.currency].code, result.total_cost,
    )
    return _to_response(result, payload.round_decimals)


@app.post("/commitments/suggest", response_model=SuggestResponse)
def commitments_suggest(payload: CalculateRequest):
    inputs = _to_inputs(payload)
    # one grid for both runs so the revised projection prices the same usage
    grid = _usage_grid(payload, inputs)
    current = compute_projection(inputs, grid, payload.year_commitments)
    suggested = suggest_commitments(current)
    revised = compute_projection(inputs, grid, suggested)
    return SuggestResponse(
        current_commitments=list(payload.year_commitments),
        suggested_commitments=list(suggested),
        projection=_to_response(revised, payload.round_decimals),
    )


@app.post("/export/xlsx")
def export_xlsx(payload: CalculateRequest):
    _, result = _run(payload)
    xlsx = projection_to_xlsx_bytes(schedule_frame(result), yearly_frame(result))
    headers = {"Content-Disposition": 'attachment; filename="projection.xlsx"'}
    return Response(content=xlsx, headers=headers, media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")


@app.post("/export/pdf")
def export_pdf(payload: CalculateRequest):
    inputs, result = _run(payload)
    title = f"3-Year Commitment Projection ({CURRENCY_PRICING[inputs.currency].code})"
    pdf = projection_to_pdf_bytes(schedule_frame(result), yearly_frame(result), title=title)
    headers = {"Content-Disposition": 'attachment; filename="projection.pdf"'}
    return Response(content=pdf, headers=headers, media_type="application/pdf")
