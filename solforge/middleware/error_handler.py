from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from ..util.exceptions import ArgumentError, RateLimitException, SolForgeError, ValidationException
from ..util.responses import APIResponse
from ..util.logger import logger


async def validation_exception_handler(request: Request, exc: ValidationException):
    # Erro de validação
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse.error_response(
            message=exc.detail.get("message") if isinstance(exc.detail, dict) else exc.detail,
            errors={"field": exc.detail.get("field") if isinstance(exc.detail, dict) else None}
        ).model_dump()
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitException):
    # Rate limit excedido
    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse.error_response(
            message=exc.detail,
            errors={"retry_after": exc.headers.get("Retry-After")}
        ).model_dump(),
        headers=exc.headers
    )


async def argument_error_handler(request: Request, exc: ArgumentError):
    # Argumento de chamada inválido
    return JSONResponse(
        status_code=422,
        content=APIResponse.error_response(
            message=str(exc),
            errors={"field": exc.param, "type": exc.__class__.__name__}
        ).model_dump()
    )


async def solforge_error_handler(request: Request, exc: SolForgeError):
    logger.warning(f"{exc.__class__.__name__} em {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content=APIResponse.error_response(
            message=str(exc),
            errors={"type": exc.__class__.__name__}
        ).model_dump()
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # Erro genérico
    logger.exception(f"Unhandled error em {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=APIResponse.error_response(
            message="Erro interno do servidor",
            errors={"detail": str(exc) if request.app.debug else None}
        ).model_dump()
    )


def register_error_handlers(app: FastAPI):
    """Tratamento global de erros"""
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(RateLimitException, rate_limit_exception_handler)
    app.add_exception_handler(ArgumentError, argument_error_handler)
    app.add_exception_handler(SolForgeError, solforge_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
