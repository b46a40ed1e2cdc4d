"""
Flattener de contratos

Junta um conjunto de fontes Solidity em um único arquivo, com as
dependências inlinadas antes de quem as usa. Necessário para a verificação
single-file em block explorers como o Etherscan.
"""
from typing import List, Mapping, Set, Union

from ..config.settings import settings
from ..model.compiler import ResolvedSourceSet, SourceUnit
from ..util.solidity import (
    IMPORT_PATTERN,
    LICENSE_PATTERN,
    PRAGMA_PATTERN,
    find_imports,
    is_relative,
    resolve_relative_path,
)

DEFAULT_LICENSE = "MIT"
DEFAULT_PRAGMA = "pragma solidity ^0.8.0;"
FLATTENED_NOTICE = [
    "// This file was flattened using a custom flattening tool",
    "// All imports have been resolved and inlined",
]

SourceMap = Mapping[str, Union[str, SourceUnit]]


def extract_license(source: str) -> str:
    match = LICENSE_PATTERN.search(source)
    if not match:
        return DEFAULT_LICENSE
    return (match.group(1) or match.group(2)).strip()


def extract_pragma(source: str) -> str:
    match = PRAGMA_PATTERN.search(source)
    return match.group(0) if match else DEFAULT_PRAGMA


def clean_source(source: str) -> str:
    """Remove licença, pragma solidity e imports"""
    cleaned = LICENSE_PATTERN.sub("", source)
    cleaned = PRAGMA_PATTERN.sub("", cleaned)
    cleaned = IMPORT_PATTERN.sub("", cleaned)
    return cleaned.strip()


class ContractFlattener:

    def __init__(self, namespace: str = None):
        self.namespace = namespace or settings.DEPENDENCY_NAMESPACE

    def _lookup_path(self, current_path: str, specifier: str, sources: Mapping[str, str]) -> str:
        if not is_relative(specifier):
            return specifier

        path = resolve_relative_path(current_path, specifier)
        if path not in sources and not path.startswith(self.namespace):
            path = f"{self.namespace}{path}"
        return path

    def flatten(self, main_source: str, resolved_sources: Union[SourceMap, ResolvedSourceSet],
                entry_path: str = "main.sol") -> str:
        """
        Achata o contrato principal e todas as dependências resolvidas.

        Licença e pragma vêm apenas do arquivo principal. Cada dependência é
        emitida uma única vez, antes dos arquivos que a importam.
        """
        if isinstance(resolved_sources, ResolvedSourceSet):
            resolved_sources = resolved_sources.dependencies

        sources = {
            path: unit.content if isinstance(unit, SourceUnit) else unit
            for path, unit in resolved_sources.items()
        }

        included: Set[str] = set()
        bodies: List[str] = []

        def process(source: str, canonical_path: str):
            if canonical_path in included:
                return
            included.add(canonical_path)

            for specifier in find_imports(source):
                path = self._lookup_path(canonical_path, specifier, sources)
                if path in sources:
                    process(sources[path], path)

            body = clean_source(source)
            if body:
                bodies.append(body)

        process(main_source, entry_path)

        return "\n".join([
            f"// SPDX-License-Identifier: {extract_license(main_source)}",
            extract_pragma(main_source),
            "",
            *FLATTENED_NOTICE,
            "",
            *bodies
        ])

    def flatten_simple(self, source: str) -> str:
        """Versão sem dependências: normaliza o cabeçalho e remove os imports"""
        return "\n".join([
            f"// SPDX-License-Identifier: {extract_license(source)}",
            extract_pragma(source),
            "",
            clean_source(source)
        ])


contract_flattener = ContractFlattener()
