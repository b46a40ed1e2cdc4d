import json
import re
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
import solcx
from solcx.exceptions import SolcError
from solcx.install import get_executable

from ..config.settings import settings
from ..model.compiler import CompilerRelease
from ..util.exceptions import CompilationError, CompilerLoadError, VersionNotFound
from ..util.logger import logger

LONG_VERSION_PATTERN = re.compile(r"v(\d+\.\d+\.\d+(?:-[\w.]+)?\+commit\.[0-9a-f]+)")


def long_version_from_build(build: str) -> str:
    """
    Extrai a versão completa (com commit) do nome do artefato
    Ex: solc-linux-amd64-v0.8.20+commit.a1b79de6 -> v0.8.20+commit.a1b79de6
    """
    match = LONG_VERSION_PATTERN.search(build)
    if match:
        return f"v{match.group(1)}"
    return build.replace("soljson-", "").replace(".js", "")


@dataclass
class LoadedCompiler:
    """Compilador solc instalado e pronto para uso"""
    version: str
    long_version: str
    executable: Path

    def compile(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Executa o solc em modo standard-json"""
        try:
            return solcx.compile_standard(input_data, solc_binary=self.executable)
        except SolcError as e:
            # py-solc-x levanta exceção quando há erros; a saída JSON continua disponível
            if e.stdout_data:
                try:
                    return json.loads(e.stdout_data)
                except ValueError:
                    pass
            raise CompilationError([getattr(e, "message", str(e))]) from e


class CompilerCatalog:
    """Manifesto de releases do solc, carregado uma única vez"""

    def __init__(self, list_url: str = None, timeout: Optional[float] = None):
        self.list_url = list_url or settings.SOLC_LIST_URL
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self._releases: Optional[Dict[str, CompilerRelease]] = None
        self._lock = threading.Lock()

    def _fetch_manifest(self) -> Dict[str, CompilerRelease]:
        try:
            response = requests.get(self.list_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise CompilerLoadError(f"Não foi possível carregar a lista de versões do solc: {e}") from e

        long_versions = {
            build.get("path"): build.get("longVersion")
            for build in data.get("builds", [])
        }

        releases = {}
        for version, build in data.get("releases", {}).items():
            long_version = long_versions.get(build)
            releases[version] = CompilerRelease(
                version=version,
                build=build,
                long_version=f"v{long_version}" if long_version else long_version_from_build(build)
            )

        logger.info(f"Manifesto do solc carregado: {len(releases)} releases")
        return releases

    def releases(self) -> Dict[str, CompilerRelease]:
        if self._releases is None:
            with self._lock:
                if self._releases is None:
                    self._releases = self._fetch_manifest()
        return self._releases

    def available_versions(self) -> List[str]:
        return list(self.releases().keys())

    def resolve_version(self, version: str) -> CompilerRelease:
        releases = self.releases()
        release = releases.get(version)
        if release is None:
            raise VersionNotFound(version, list(releases.keys())[:10])
        return release

    def invalidate(self):
        with self._lock:
            self._releases = None


class CompilerLoader:
    """
    Cache de compiladores por versão, válido durante todo o processo.

    Cargas concorrentes da mesma versão compartilham um único Future em
    andamento; só a primeira chamada instala o binário.
    """

    def __init__(self, catalog: CompilerCatalog = None):
        self.catalog = catalog or compiler_catalog
        self._compilers: Dict[str, LoadedCompiler] = {}
        self._in_flight: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def _instantiate(self, release: CompilerRelease) -> LoadedCompiler:
        logger.info(f"Carregando compilador Solidity: {release.version} -> {release.long_version}")
        try:
            installed = {str(v) for v in solcx.get_installed_solc_versions()}
            if release.version not in installed:
                solcx.install_solc(release.version, show_progress=False)
            executable = get_executable(release.version)
        except Exception as e:
            raise CompilerLoadError(
                f"Falha ao carregar o compilador Solidity {release.version}: {e}"
            ) from e

        return LoadedCompiler(
            version=release.version,
            long_version=release.long_version,
            executable=Path(executable)
        )

    def load(self, release: CompilerRelease) -> LoadedCompiler:
        with self._lock:
            compiler = self._compilers.get(release.version)
            if compiler is not None:
                return compiler

            future = self._in_flight.get(release.version)
            owner = future is None
            if owner:
                future = Future()
                self._in_flight[release.version] = future

        if not owner:
            return future.result()

        try:
            compiler = self._instantiate(release)
        except Exception as e:
            with self._lock:
                self._in_flight.pop(release.version, None)
            future.set_exception(e)
            raise

        with self._lock:
            self._compilers[release.version] = compiler
            self._in_flight.pop(release.version, None)
        future.set_result(compiler)
        return compiler

    def load_version(self, version: str) -> LoadedCompiler:
        return self.load(self.catalog.resolve_version(version))

    def cached_versions(self) -> List[str]:
        with self._lock:
            return list(self._compilers.keys())

    def is_loading(self, version: str) -> bool:
        with self._lock:
            return version in self._in_flight

    def invalidate(self):
        with self._lock:
            self._compilers.clear()


compiler_catalog = CompilerCatalog()
compiler_loader = CompilerLoader(compiler_catalog)
