from typing import Any, Dict, List

from ..model.compiler import ResolvedSourceSet
from ..schema.compiler import CompilationResult, CompileRequest, CompiledContract, ConstructorInput
from ..service.compiler_catalog import CompilerCatalog, CompilerLoader, compiler_catalog, compiler_loader
from ..service.flattener import ContractFlattener, contract_flattener
from ..service.import_resolver import ImportResolver
from ..util.exceptions import CompilationError, NoContractProduced, SolForgeError
from ..util.logger import logger


def build_standard_input(sources: ResolvedSourceSet, request: CompileRequest) -> Dict[str, Any]:
    """Input standard-json do solc"""
    return {
        "language": "Solidity",
        "sources": sources.to_compiler_sources(),
        "settings": {
            "outputSelection": {
                "*": {
                    "*": ["abi", "evm.bytecode.object"]
                }
            },
            "optimizer": {
                "enabled": request.optimization_enabled,
                "runs": request.optimization_runs
            },
            "evmVersion": request.evm_version
        }
    }


def error_diagnostics(output: Dict[str, Any]) -> List[str]:
    """Somente diagnósticos com severidade error (warnings são ignorados)"""
    return [
        error.get("formattedMessage") or error.get("message", "")
        for error in output.get("errors", [])
        if error.get("severity") == "error"
    ]


class CompilerService:
    """Pipeline de compilação: versão -> imports -> solc -> flatten"""

    def __init__(
            self,
            catalog: CompilerCatalog = None,
            loader: CompilerLoader = None,
            resolver: ImportResolver = None,
            flattener: ContractFlattener = None
    ):
        self.catalog = catalog or compiler_catalog
        self.loader = loader or compiler_loader
        self.resolver = resolver or ImportResolver()
        self.flattener = flattener or contract_flattener

    def compile(self, request: CompileRequest) -> CompilationResult:
        """
        Compila o contrato e devolve ABI, bytecode e fonte achatado.
        Qualquer falha vira CompilationResult(success=False).
        """
        logger.info(
            f"Compilando {request.file_name} com solc {request.solc_version}, "
            f"otimização: {request.optimization_enabled} ({request.optimization_runs} runs), "
            f"EVM: {request.evm_version}"
        )

        try:
            release = self.catalog.resolve_version(request.solc_version)
            compiler = self.loader.load(release)

            sources = self.resolver.resolve_all(request.source_code, request.file_name)
            output = compiler.compile(build_standard_input(sources, request))

            diagnostics = error_diagnostics(output)
            if diagnostics:
                raise CompilationError(diagnostics)

            contract = self._select_contract(output, request.file_name)
            contract.flattened_source = self.flattener.flatten(
                request.source_code, sources, entry_path=request.file_name
            )

        except CompilationError as e:
            logger.error(f"Erros de compilação em {request.file_name}:\n{e}")
            return CompilationResult.failure(str(e), e.diagnostics)

        except SolForgeError as e:
            logger.error(f"Falha na compilação de {request.file_name}: {e}")
            return CompilationResult.failure(str(e))

        except Exception as e:
            logger.exception(f"Erro inesperado compilando {request.file_name}")
            return CompilationResult.failure(str(e) or "Erro desconhecido na compilação")

        return CompilationResult(
            success=True,
            message="Contrato compilado com sucesso",
            contract=contract,
            compiler_version=compiler.long_version
        )

    def _select_contract(self, output: Dict[str, Any], file_name: str) -> CompiledContract:
        contracts = output.get("contracts", {}).get(file_name)
        if not contracts:
            raise NoContractProduced("Nenhum contrato encontrado no código-fonte")

        # Com vários contratos no arquivo, vale o primeiro na ordem de emissão do solc
        contract_name, data = next(iter(contracts.items()))

        bytecode = data.get("evm", {}).get("bytecode", {}).get("object")
        if not bytecode:
            raise NoContractProduced(f"O contrato {contract_name} não gerou bytecode (abstract ou interface?)")

        abi = data.get("abi", [])
        constructor = next((item for item in abi if item.get("type") == "constructor"), None)
        constructor_inputs = [
            ConstructorInput(
                name=param.get("name", ""),
                type=param["type"],
                internal_type=param.get("internalType")
            )
            for param in (constructor or {}).get("inputs", [])
        ]

        return CompiledContract(
            abi=abi,
            bytecode=f"0x{bytecode}",
            contract_name=contract_name,
            constructor_inputs=constructor_inputs
        )

    def flatten_source(self, source_code: str, file_name: str = "Contract.sol") -> str:
        """Resolve os imports e gera o fonte achatado, sem compilar"""
        sources = self.resolver.resolve_all(source_code, file_name)
        return self.flattener.flatten(source_code, sources, entry_path=file_name)


compiler_service = CompilerService()
