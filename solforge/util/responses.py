# solforge/util/responses.py
from typing import Any, Optional, Dict
from pydantic import BaseModel


class APIResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    errors: Optional[Dict[str, Any]] = None

    @classmethod
    def success_response(cls, data: Any = None, message: str = "Operação realizada com sucesso"):
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_response(cls, message: str, errors: Dict[str, Any] = None):
        return cls(success=False, message=message, errors=errors)

    @classmethod
    def from_compilation(cls, result):
        """Converte um CompilationResult no envelope padrão da API"""
        if result.success:
            return cls(
                success=True,
                message=result.message,
                data={
                    "contract": result.contract.model_dump(),
                    "compiler_version": result.compiler_version
                }
            )
        return cls(
            success=False,
            message=result.message,
            errors={"diagnostics": result.diagnostics} if result.diagnostics else None
        )
