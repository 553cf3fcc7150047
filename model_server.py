"""FastAPI service answering valid/hoax predictions from a saved model."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from hoax_detection.config import DEFAULT_MODEL_PATH
from hoax_detection.errors import ModelArtifactError
from hoax_detection.inference import predict
from hoax_detection.training import HoaxModel, load_model
from observability.metrics import count_prediction, metrics_middleware, mount_metrics_endpoint, track_inference

MODEL_PATH = os.environ.get("HOAX_MODEL_PATH", str(DEFAULT_MODEL_PATH))


class PredictRequest(BaseModel):
    text: str = Field(..., description="News narrative to classify")


class PredictResponse(BaseModel):
    label: str
    predicted_label: bool
    probability: float
    score: float
    model_version: str

    model_config = ConfigDict(protected_namespaces=())


def create_app(model: Optional[HoaxModel] = None, model_path: Optional[str | Path] = None) -> FastAPI:
    """Build the API; the model is loaded from *model_path* on first use."""
    app = FastAPI(title="Hoax Detection API", version="0.1.0")
    metrics_middleware(app)
    mount_metrics_endpoint(app)

    resolved_path = Path(model_path or MODEL_PATH)
    state = {"model": model}

    def _get_model() -> HoaxModel:
        if state["model"] is None:
            try:
                state["model"] = load_model(resolved_path)
            except ModelArtifactError as exc:
                raise HTTPException(status_code=503, detail=str(exc)) from exc
        return state["model"]

    @app.get("/health")
    def health() -> dict:
        loaded = state["model"] is not None
        return {
            "ok": loaded or resolved_path.is_file(),
            "model_loaded": loaded,
            "model_path": str(resolved_path),
        }

    @app.post("/predict", response_model=PredictResponse)
    def predict_endpoint(request: PredictRequest) -> PredictResponse:
        if not request.text.strip():
            raise HTTPException(status_code=400, detail="Request must include non-empty news text")

        current = _get_model()
        with track_inference():
            prediction = predict(current, request.text)
        count_prediction(prediction.verdict)

        return PredictResponse(
            label=prediction.verdict,
            predicted_label=prediction.predicted_label,
            probability=round(prediction.probability, 4),
            score=prediction.score,
            model_version=current.version,
        )

    return app


app = create_app()


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    uvicorn.run("model_server:app", host=host, port=port)


if __name__ == "__main__":
    serve()
