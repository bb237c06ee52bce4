"""SMS page and prediction routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from frontend.metrics import MetricsRegistry, get_metrics_registry
from frontend.sms.client import ModelClient, ModelServiceError
from frontend.sms.schemas import SmsPredictionRequest
from frontend.sms.service import predict_sms

router = APIRouter()


def _templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates  # type: ignore[attr-defined]


def get_model_client(request: Request) -> ModelClient:
    client: ModelClient | None = getattr(request.app.state, "model_client", None)
    if client is None:
        raise RuntimeError("Model client not configured on application state")
    return client


@router.get("", include_in_schema=False)
async def redirect_to_slash(request: Request) -> RedirectResponse:
    # Relative requests issued by the page resolve against /sms/, not /sms.
    return RedirectResponse(url=f"{request.url.path}/", status_code=302)


@router.get("/", response_class=HTMLResponse)
async def sms_page(request: Request, client: ModelClient = Depends(get_model_client)) -> HTMLResponse:
    """Render the SMS input page."""

    context = {"hostname": client.base_url}
    return _templates(request).TemplateResponse(request, "sms/index.html", context)


@router.post("")
@router.post("/")
async def predict_endpoint(
    payload: SmsPredictionRequest,
    client: ModelClient = Depends(get_model_client),
    registry: MetricsRegistry = Depends(get_metrics_registry),
) -> JSONResponse:
    try:
        prediction = await predict_sms(payload, client, registry)
    except ModelServiceError as exc:
        raise HTTPException(status_code=502, detail="Prediction service unavailable") from exc
    return JSONResponse(prediction.model_dump(mode="json"))
