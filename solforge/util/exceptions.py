# solforge/util/exceptions.py
from fastapi import HTTPException, status
from typing import Iterable, List, Optional


class SolForgeError(Exception):
    """Base para erros do pipeline de compilação"""


class VersionNotFound(SolForgeError):
    """Versão curta do solc inexistente no manifesto de releases"""

    def __init__(self, version: str, available: Iterable[str] = ()):
        self.version = version
        self.available = list(available)[:10]
        super().__init__(
            f"Versão do Solidity {version} não encontrada. "
            f"Versões disponíveis: {', '.join(self.available)}"
        )


class CompilerLoadError(SolForgeError):
    """Falha ao baixar ou instanciar o compilador"""


class ImportFetchError(SolForgeError):
    """Falha ao buscar um import remoto (não fatal)"""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Falha ao buscar {path}: {reason}")


class CompilationError(SolForgeError):
    """Diagnósticos de nível error retornados pelo compilador"""

    def __init__(self, diagnostics: List[str]):
        self.diagnostics = list(diagnostics)
        super().__init__("\n".join(self.diagnostics))


class NoContractProduced(SolForgeError):
    """O arquivo de entrada não gerou nenhum contrato"""


class VerificationError(SolForgeError):
    """Falha ao preparar a verificação no explorer"""


class ArgumentError(SolForgeError, ValueError):
    """Entrada literal inválida para um parâmetro da ABI"""

    def __init__(self, message: str, param: Optional[str] = None):
        self.param = param
        super().__init__(message)


class ArgumentFormatError(ArgumentError):
    pass


class ArgumentCountError(ArgumentError):
    pass


class ValidationException(HTTPException):
    """Exceção para validação de dados"""

    def __init__(self, detail: str, field: str = None):
        error_detail = {
            "message": detail,
            "field": field
        } if field else detail

        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=error_detail
        )


class RateLimitException(HTTPException):
    """Exceção para rate limiting"""

    def __init__(self, retry_after: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Muitas compilações. Tente novamente em {retry_after} segundos",
            headers={"Retry-After": str(retry_after)}
        )
