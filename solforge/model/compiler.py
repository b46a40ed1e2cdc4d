from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional


@dataclass(frozen=True)
class CompilerRelease:
    """Release do solc listado no manifesto remoto"""
    version: str
    build: str
    long_version: str


@dataclass(frozen=True)
class SourceUnit:
    """Arquivo fonte identificado pelo caminho canônico"""
    path: str
    content: str


@dataclass
class ResolvedSourceSet:
    """
    Conjunto de fontes de uma requisição.
    O arquivo de entrada fica em `entry`; as dependências ficam em `units`,
    indexadas pelo caminho canônico.
    """
    entry: SourceUnit
    units: Dict[str, SourceUnit] = field(default_factory=dict)

    def __contains__(self, path: str) -> bool:
        return path == self.entry.path or path in self.units

    def __iter__(self) -> Iterator[SourceUnit]:
        yield self.entry
        yield from self.units.values()

    def __len__(self) -> int:
        return len(self.units) + 1

    def get(self, path: str) -> Optional[SourceUnit]:
        if path == self.entry.path:
            return self.entry
        return self.units.get(path)

    def add(self, unit: SourceUnit):
        self.units[unit.path] = unit

    @property
    def dependencies(self) -> Dict[str, str]:
        """Mapa caminho canônico -> conteúdo, sem o arquivo de entrada"""
        return {path: unit.content for path, unit in self.units.items()}

    def to_compiler_sources(self) -> Dict[str, Dict[str, str]]:
        """Formato `sources` do standard-json do solc"""
        return {unit.path: {"content": unit.content} for unit in self}
