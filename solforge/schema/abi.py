from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CategorizeAbiRequest(BaseModel):
    """Request com a ABI compilada"""
    abi: List[Dict[str, Any]]


class ParseArgumentsRequest(BaseModel):
    """Valores digitados por parâmetro (chave = nome ou paramN)"""
    inputs: List[Dict[str, Any]] = Field(..., description="Inputs da função na ABI")
    values: Dict[str, Optional[str]] = {}


class FormatResultRequest(BaseModel):
    """Resultado bruto de uma chamada"""
    result: Any = None
