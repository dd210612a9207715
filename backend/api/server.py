"""
Gantt Generator: HTTP API Server
================================

Endpoints:
- GET  /               -> form page
- GET  /health         -> service status
- POST /api/generate   -> instructions (+ documents) -> HTML chart or timeline JSON
- POST /api/render     -> timeline JSON -> HTML chart (no model call)
- POST /api/classify   -> instructions (+ documents) -> interval estimate

The generation pipeline is synchronous; it runs in the threadpool so the
event loop is never blocked by the provider call.

Usage:
    uvicorn backend.api.server:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, List, Literal, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from frontend.visualization import render

from ..config import ProviderSettings, build_provider
from ..contracts.errors import ConfigurationError, GenerationError, SchemaError
from ..engine import EngineConfig, GanttEngine
from ..intervals import classify_inputs
from ..validation import parse_timeline
from .mapper import error_status, map_failure, map_success

logger = logging.getLogger(__name__)

SERVICE_NAME = "gantt-generator"

# Ten years of weeks. Caller-supplied timelines above this are refused before layout.
MAX_RENDER_INTERVALS = 520


# =============================================================================
# REQUEST MODELS
# =============================================================================

class GenerateRequest(BaseModel):
    instructions: str = ""
    documents: List[str] = Field(default_factory=list)
    format: Literal["html", "json"] = "html"


class ClassifyRequest(BaseModel):
    instructions: str = ""
    documents: List[str] = Field(default_factory=list)


# =============================================================================
# APP FACTORY
# =============================================================================

def engine_from_env() -> GanttEngine:
    """Raises ConfigurationError when no provider can be built."""
    provider = build_provider(ProviderSettings.from_env())
    return GanttEngine(provider, EngineConfig.from_env(), renderer=render)


def create_app(engine: Optional[GanttEngine] = None) -> FastAPI:
    """
    Build the API around `engine`.

    Without an engine, one is built from the environment at startup.
    If that fails the server still starts: render/classify work, and
    generate answers 503 until a provider is configured.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.engine is None:
            try:
                app.state.engine = engine_from_env()
                logger.info("Provider ready: %s", app.state.engine.provider.provider_id)
            except ConfigurationError as e:
                app.state.config_error = str(e)
                logger.warning("Generation disabled: %s", e)
        yield
        if app.state.engine is not None:
            app.state.engine.provider.close()

    app = FastAPI(
        title="Gantt Generator API",
        version="0.1.0",
        description="Free-text project instructions to HTML Gantt charts",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.config_error = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    @app.get("/health")
    async def health_check():
        current = app.state.engine
        if current is None:
            raise HTTPException(
                status_code=503,
                detail=app.state.config_error or "No provider configured",
            )
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "provider": current.provider.provider_id,
        }

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return INDEX_PAGE

    @app.post("/api/generate")
    async def generate(request: GenerateRequest):
        if not request.instructions.strip():
            return JSONResponse(status_code=400, content={"error": "Instructions are required"})

        current = app.state.engine
        if current is None:
            error = ConfigurationError(app.state.config_error or "No provider configured")
            return JSONResponse(status_code=503, content=error.to_dict())

        result = await run_in_threadpool(current.generate, request.instructions, request.documents)
        if not result.success:
            return JSONResponse(status_code=error_status(result.error), content=map_failure(result))

        if request.format == "json":
            return map_success(result)
        return HTMLResponse(result.markup if result.markup is not None else render(result.timeline))

    @app.post("/api/render", response_class=HTMLResponse)
    async def render_timeline(payload: Any = Body(...)):
        validation = parse_timeline(payload)
        if validation.is_failure:
            return JSONResponse(status_code=422, content=validation.error.to_dict())
        total = validation.timeline.total_intervals
        if total > MAX_RENDER_INTERVALS:
            error = SchemaError(
                "totalIntervals", f"must be <= {MAX_RENDER_INTERVALS} to render", total
            )
            return JSONResponse(status_code=422, content=error.to_dict())
        try:
            return HTMLResponse(render(validation.timeline))
        except GenerationError as e:
            return JSONResponse(status_code=error_status(e), content=e.to_dict())

    @app.post("/api/classify")
    async def classify(request: ClassifyRequest):
        return classify_inputs(request.instructions, request.documents).to_dict()

    return app


INDEX_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Gantt Chart Generator</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background: #f5f5f5; padding: 40px; }
        .container { background: white; max-width: 900px; margin: 0 auto; padding: 40px; border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }
        h1 { color: #5a5a5a; margin-bottom: 24px; }
        label { display: block; font-weight: 600; color: #666; margin: 16px 0 8px; }
        textarea { width: 100%; min-height: 120px; padding: 12px; border: 1px solid #ddd; border-radius: 4px; font-family: inherit; }
        button { margin-top: 16px; padding: 12px 24px; background: #2196f3; color: white; border: 0; border-radius: 4px; cursor: pointer; }
        #status { margin-top: 16px; color: #666; }
        #dropzone { margin-top: 8px; padding: 20px; border: 2px dashed #ccc; border-radius: 4px; color: #888; text-align: center; cursor: pointer; }
        #dropzone.active { border-color: #2196f3; color: #2196f3; }
        #files { margin: 8px 0 0; padding-left: 20px; color: #666; }
        iframe { width: 100%; height: 700px; border: 1px solid #ddd; margin-top: 24px; display: none; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Gantt Chart Generator</h1>
        <label for="instructions">Instructions</label>
        <textarea id="instructions" placeholder="e.g. Create an 8-week plan for launching a mobile app"></textarea>
        <label for="documents">Reference document (optional)</label>
        <textarea id="documents"></textarea>
        <div id="dropzone">Drop .txt or .md files here, or click to choose</div>
        <input type="file" id="file-input" accept=".txt,.md" multiple hidden>
        <ul id="files"></ul>
        <button id="generate">Generate</button>
        <div id="status"></div>
        <iframe id="chart"></iframe>
    </div>
    <script>
        const loaded = [];
        const dropzone = document.getElementById('dropzone');
        const fileInput = document.getElementById('file-input');

        async function addFiles(files) {
            for (const file of files) {
                if (!/\\.(txt|md)$/i.test(file.name)) continue;
                loaded.push('[' + file.name + ']\\n' + await file.text());
                const item = document.createElement('li');
                item.textContent = file.name;
                document.getElementById('files').appendChild(item);
            }
        }

        dropzone.addEventListener('click', () => fileInput.click());
        fileInput.addEventListener('change', () => addFiles(fileInput.files));
        dropzone.addEventListener('dragover', (event) => {
            event.preventDefault();
            dropzone.classList.add('active');
        });
        dropzone.addEventListener('dragleave', () => dropzone.classList.remove('active'));
        dropzone.addEventListener('drop', (event) => {
            event.preventDefault();
            dropzone.classList.remove('active');
            addFiles(event.dataTransfer.files);
        });

        document.getElementById('generate').addEventListener('click', async () => {
            const status = document.getElementById('status');
            const chart = document.getElementById('chart');
            const instructions = document.getElementById('instructions').value;
            const doc = document.getElementById('documents').value.trim();
            status.textContent = 'Generating...';
            chart.style.display = 'none';
            const response = await fetch('/api/generate', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ instructions, documents: (doc ? [doc] : []).concat(loaded), format: 'html' })
            });
            if (!response.ok) {
                const body = await response.json();
                status.textContent = 'Error: ' + (body.error || response.statusText);
                return;
            }
            chart.srcdoc = await response.text();
            chart.style.display = 'block';
            status.textContent = '';
        });
    </script>
</body>
</html>
"""

app = create_app()
