"""Prediction flow with metrics instrumentation."""

from __future__ import annotations

import time

from frontend.lib.logger import get_logger
from frontend.metrics import MetricsRegistry, suppress_metric_errors
from frontend.sms.client import ModelClient
from frontend.sms.schemas import SmsPrediction, SmsPredictionRequest

logger = get_logger(__name__)


async def predict_sms(
    payload: SmsPredictionRequest,
    client: ModelClient,
    registry: MetricsRegistry,
) -> SmsPrediction:
    """Classify an SMS, counting the outcome and timing the call.

    The input length and duration are recorded for every attempt; exactly one
    of the ``success``/``error`` counters is bumped. Model failures propagate
    after being counted.
    """

    started = time.perf_counter()
    logger.info("sms.predict.request", extra={"length": len(payload.sms)})
    try:
        with suppress_metric_errors("input_text_length"):
            registry.set_gauge(len(payload.sms))

        result = await client.predict(payload.sms)
        logger.info("sms.predict.result", extra={"result": result})

        with suppress_metric_errors("predictions_total"):
            registry.increment_counter("success")
        return SmsPrediction(sms=payload.sms, result=result)
    except Exception:
        with suppress_metric_errors("predictions_total"):
            registry.increment_counter("error")
        raise
    finally:
        with suppress_metric_errors("prediction_duration_seconds"):
            registry.record_duration(time.perf_counter() - started)
