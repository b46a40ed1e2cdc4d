from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api import abi, compiler, verification
from .config.settings import settings
from .middleware.error_handler import register_error_handlers
from .service.compiler_catalog import compiler_loader

from .util.responses import APIResponse

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def add_rate_limit_headers(request: Request, call_next):
    """Adiciona headers de rate limit"""
    response = await call_next(request)

    if hasattr(request.state, "rate_limit_remaining"):
        response.headers["X-RateLimit-Remaining"] = str(request.state.rate_limit_remaining)
        response.headers["X-RateLimit-Limit"] = str(request.state.rate_limit_limit)

    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Adiciona ID único para cada request"""
    import uuid
    request_id = str(uuid.uuid4())

    request.state.request_id = request_id

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id

    return response


# Incluir rotas
app.include_router(compiler.router)
app.include_router(abi.router)
app.include_router(verification.router)


# Root endpoint
@app.get("/", response_model=APIResponse)
async def root():
    return APIResponse.success_response(
        data={
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        },
        message="API SolForge"
    )


# Health check
@app.get("/health", response_model=APIResponse)
async def health_check():
    return APIResponse.success_response(
        data={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "loaded_compilers": compiler_loader.cached_versions()
        },
        message="Sistema operacional"
    )
