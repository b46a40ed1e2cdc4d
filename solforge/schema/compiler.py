from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..config.settings import settings

EvmVersion = Literal["paris", "shanghai", "cancun", "london", "berlin", "istanbul"]


class CompileRequest(BaseModel):
    """Request de compilação"""
    source_code: str = Field(..., min_length=1)
    file_name: str = "Contract.sol"
    solc_version: str = settings.SOLC_DEFAULT_VERSION
    optimization_enabled: bool = True
    optimization_runs: int = Field(200, ge=1, le=10000)
    evm_version: EvmVersion = "paris"


class FlattenRequest(BaseModel):
    """Request para gerar o fonte achatado sem compilar"""
    source_code: str = Field(..., min_length=1)
    file_name: str = "Contract.sol"


class ConstructorInput(BaseModel):
    name: str = ""
    type: str
    internal_type: Optional[str] = None


class CompiledContract(BaseModel):
    abi: List[Dict[str, Any]]
    bytecode: str
    contract_name: str
    constructor_inputs: List[ConstructorInput] = []
    flattened_source: Optional[str] = None


class CompilationResult(BaseModel):
    """Resultado da compilação; em caso de falha só success/message/diagnostics"""
    success: bool
    message: Optional[str] = None
    diagnostics: List[str] = []
    contract: Optional[CompiledContract] = None
    compiler_version: Optional[str] = Field(None, description="Versão completa, ex: v0.8.20+commit.a1b79de6")

    @classmethod
    def failure(cls, message: str, diagnostics: List[str] = None):
        return cls(success=False, message=message, diagnostics=diagnostics or [])
