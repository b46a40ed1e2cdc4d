from typing import Optional, Set

import requests

from ..config.settings import settings
from ..model.compiler import ResolvedSourceSet, SourceUnit
from ..util.exceptions import ImportFetchError
from ..util.logger import logger
from ..util.solidity import find_imports, is_relative, resolve_relative_path


class DependencyFetcher:
    """Busca fontes de dependências no repositório remoto do namespace"""

    def __init__(self, base_url: str = None, namespace: str = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.DEPENDENCY_BASE_URL).rstrip("/")
        self.namespace = namespace or settings.DEPENDENCY_NAMESPACE
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self.session = requests.Session()

    def url_for(self, canonical_path: str) -> str:
        relative = canonical_path[len(self.namespace):] if canonical_path.startswith(self.namespace) else canonical_path
        return f"{self.base_url}/{relative}"

    def fetch(self, canonical_path: str) -> str:
        url = self.url_for(canonical_path)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ImportFetchError(canonical_path, str(e)) from e

        if not response.ok:
            raise ImportFetchError(canonical_path, f"HTTP {response.status_code} em {url}")

        return response.text


class ImportResolver:
    """
    Resolve recursivamente (em profundidade, de forma serial) todos os imports
    de um arquivo Solidity, buscando cada dependência uma única vez.
    """

    def __init__(self, fetcher: DependencyFetcher = None, namespace: str = None):
        self.fetcher = fetcher or DependencyFetcher()
        self.namespace = namespace or settings.DEPENDENCY_NAMESPACE

    def canonical_path(self, current_path: str, specifier: str) -> Optional[str]:
        """Caminho canônico de um import, ou None se estiver fora do namespace"""
        if specifier.startswith(self.namespace):
            return specifier

        if is_relative(specifier):
            resolved = resolve_relative_path(current_path, specifier)
            if not resolved.startswith(self.namespace):
                resolved = f"{self.namespace}{resolved}"
            return resolved

        return None

    def resolve_all(self, entry_text: str, base_path: str = "") -> ResolvedSourceSet:
        resolved = ResolvedSourceSet(entry=SourceUnit(path=base_path, content=entry_text))
        visited = {base_path}
        self._resolve(entry_text, base_path, resolved, visited)
        logger.info(f"Imports resolvidos para {base_path or '<entrada>'}: {len(resolved.units)} dependências")
        return resolved

    def _resolve(self, source: str, current_path: str, resolved: ResolvedSourceSet, visited: Set[str]):
        for specifier in find_imports(source):
            path = self.canonical_path(current_path, specifier)
            if path is None:
                logger.debug(f"Import ignorado (fora do namespace): {specifier}")
                continue

            if path in visited:
                continue
            visited.add(path)

            try:
                content = self.fetcher.fetch(path)
            except ImportFetchError as e:
                logger.warning(str(e))
                continue

            resolved.add(SourceUnit(path=path, content=content))
            self._resolve(content, path, resolved, visited)
