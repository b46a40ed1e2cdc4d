import re
from typing import List

# import "x";  import "x" as X;  import {A, B} from "x";  import * as X from "x";
IMPORT_PATTERN = re.compile(
    r"""\bimport\s+(?:(?:\{[^}]*\}|[^"';]*?)\s+from\s+)?["']([^"']+)["'](?:\s+as\s+\w+)?\s*;"""
)
# // SPDX-License-Identifier: X  ou  /* SPDX-License-Identifier: X */
LICENSE_PATTERN = re.compile(
    r"//[ \t]*SPDX-License-Identifier:[ \t]*([^\r\n]+)"
    r"|/\*[ \t]*SPDX-License-Identifier:[ \t]*([^\r\n]*?)[ \t]*\*/"
)
# qualquer expressão de versão, inclusive intervalos com hífen (0.8.0 - 0.8.24)
PRAGMA_PATTERN = re.compile(r"pragma\s+solidity\s+([^;]+);")


def find_imports(source: str) -> List[str]:
    """Especificadores de import na ordem em que aparecem"""
    return [match.group(1) for match in IMPORT_PATTERN.finditer(source)]


def is_relative(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../")


def resolve_relative_path(current_path: str, specifier: str) -> str:
    """
    Resolve um import relativo a partir do caminho canônico do arquivo atual,
    como o solc faz: remove o nome do arquivo, `..` sobe um nível e `.` é ignorado.
    """
    if not is_relative(specifier):
        return specifier

    parts = current_path.split("/")[:-1]
    for part in specifier.split("/"):
        if part == "..":
            if parts:
                parts.pop()
        elif part not in (".", ""):
            parts.append(part)

    return "/".join(parts)
