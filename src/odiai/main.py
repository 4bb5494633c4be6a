from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from odiai import config, __version__
from odiai.routers import api, websocket
from odiai.utils.history import HistoryStore
from odiai.utils.storage import JsonFileStorage
from odiai.utils.translation import TranslationClient

INDEX_HTML = Path(__file__).parent / "static" / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared history store and translation client"""
    path = config.history_path()
    print(f"🚀 Loading translation history from {path}...")
    app.state.history = HistoryStore(JsonFileStorage(path))
    app.state.translator = TranslationClient()
    app.state.debounce_seconds = config.DEBOUNCE_SECONDS
    print(f"✅ Ready (model={app.state.translator.model}, debounce={config.DEBOUNCE_SECONDS * 1000:.0f}ms)")

    yield

    print("🔌 Shutting down...")


app = FastAPI(
    title="OdiaAI Translator",
    description="English & Hindi to Odia translation with debounced input and local history",
    version=__version__,
    lifespan=lifespan,
)

# Security headers for production only
if config.is_production():
    from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
    from starlette.middleware.base import BaseHTTPMiddleware

    class SecurityHeadersMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request, call_next):
            response = await call_next(request)
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
            response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
            return response

    app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Translator form
@app.get("/", response_class=HTMLResponse)
async def index():
    return INDEX_HTML.read_text(encoding="utf-8")


# Include routers
app.include_router(
    api.router,
    prefix="/api",
    tags=["api"],
)

app.include_router(
    websocket.router,
    prefix="/ws",
    tags=["websocket"],
)


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "OdiaAI Translator"}
