from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from ..middleware.rate_limiter import compile_limiter
from ..schema.compiler import CompileRequest, FlattenRequest
from ..service.compiler_catalog import compiler_catalog
from ..service.compiler_service import compiler_service
from ..util.logger import CompilationAuditLogger
from ..util.responses import APIResponse

router = APIRouter(prefix="/compiler", tags=["Compiler"])


@router.post("/compile", response_model=APIResponse, dependencies=[Depends(compile_limiter)])
async def compile_contract(request: CompileRequest):
    """
    Compila o contrato com a versão pedida do solc
    Retorna ABI, bytecode, inputs do construtor e fonte achatado
    """
    result = await run_in_threadpool(compiler_service.compile, request)

    CompilationAuditLogger.log_compile_event(
        file_name=request.file_name,
        solc_version=request.solc_version,
        success=result.success,
        contract_name=result.contract.contract_name if result.contract else None,
        message=None if result.success else result.message,
        details={
            "optimization_enabled": request.optimization_enabled,
            "optimization_runs": request.optimization_runs,
            "evm_version": request.evm_version
        }
    )

    return APIResponse.from_compilation(result)


@router.post("/flatten", response_model=APIResponse)
async def flatten_contract(request: FlattenRequest):
    """
    Gera o fonte achatado (single-file) para verificação
    """
    flattened = await run_in_threadpool(
        compiler_service.flatten_source, request.source_code, request.file_name
    )

    return APIResponse.success_response(
        data={"flattened_source": flattened},
        message="Fonte achatado com sucesso"
    )


@router.get("/versions", response_model=APIResponse)
async def list_versions():
    """Versões curtas do solc disponíveis no manifesto"""
    versions = await run_in_threadpool(compiler_catalog.available_versions)

    return APIResponse.success_response(
        data={"versions": versions, "total": len(versions)},
        message="Versões disponíveis"
    )
