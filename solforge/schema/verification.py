from typing import Any, Dict, List

from pydantic import BaseModel, Field


class VerifyContractRequest(BaseModel):
    """Request para verificar um contrato implantado no explorer"""
    contract_address: str = Field(..., min_length=42, max_length=42)
    chain_id: int
    source_code: str = Field(..., description="Fonte achatado (single-file)")
    contract_name: str
    compiler_version: str = Field(..., description="Versão completa, ex: v0.8.20+commit.a1b79de6")
    abi: List[Dict[str, Any]] = []
    constructor_args: List[Any] = []
    optimization_enabled: bool = True
    optimization_runs: int = 200
    evm_version: str = "paris"
