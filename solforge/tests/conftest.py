"""
Fixtures compartilhadas: fontes Solidity de exemplo e fakes de rede/compilador
"""

import pytest

from solforge.model.compiler import CompilerRelease
from solforge.util.exceptions import ImportFetchError

NS = "@openzeppelin/contracts/"


class FakeFetcher:
    """Fetcher em memória que registra cada busca"""

    def __init__(self, sources):
        self.sources = dict(sources)
        self.calls = []

    def fetch(self, canonical_path):
        self.calls.append(canonical_path)
        if canonical_path not in self.sources:
            raise ImportFetchError(canonical_path, "HTTP 404")
        return self.sources[canonical_path]


class FakeCompiler:
    """Compilador que devolve uma saída standard-json pronta"""

    def __init__(self, output, long_version="v0.8.20+commit.a1b79de6"):
        self.output = output
        self.version = "0.8.20"
        self.long_version = long_version
        self.inputs = []

    def compile(self, input_data):
        self.inputs.append(input_data)
        return self.output


def unit(name, imports=(), license_id="MIT", pragma="pragma solidity ^0.8.20;"):
    """Monta um arquivo Solidity mínimo com os imports dados"""
    lines = [f"// SPDX-License-Identifier: {license_id}", pragma, ""]
    lines += [f'import "{path}";' for path in imports]
    lines += ["", f"contract {name} {{", f"    uint256 public marker{name};", "}"]
    return "\n".join(lines)


@pytest.fixture
def release():
    return CompilerRelease(
        version="0.8.20",
        build="solc-linux-amd64-v0.8.20+commit.a1b79de6",
        long_version="v0.8.20+commit.a1b79de6"
    )


@pytest.fixture
def diamond_sources():
    """A importa B e C; B e C importam D"""
    return {
        f"{NS}B.sol": unit("B", imports=["./D.sol"], license_id="GPL-3.0", pragma="pragma solidity ^0.8.0;"),
        f"{NS}C.sol": unit("C", imports=[f"{NS}D.sol"], license_id="Apache-2.0"),
        f"{NS}D.sol": unit("D", pragma="pragma solidity >=0.8.0 <0.9.0;"),
    }


@pytest.fixture
def diamond_entry():
    return unit("A", imports=[f"{NS}B.sol", f"{NS}C.sol"])


@pytest.fixture
def cyclic_sources():
    """X importa Y e Y importa X"""
    return {
        f"{NS}X.sol": unit("X", imports=["./Y.sol"]),
        f"{NS}Y.sol": unit("Y", imports=["./X.sol"]),
    }
