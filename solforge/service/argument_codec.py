"""
Conversão entre o texto digitado pelo usuário e os argumentos tipados de uma
chamada de contrato, e formatação dos resultados retornados.

O tipo Solidity é interpretado uma vez (`parse_type`) em uma das variantes
abaixo; `parse_argument` despacha pela variante.
"""
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from ..util.exceptions import ArgumentCountError, ArgumentFormatError

FIXED_ARRAY_PATTERN = re.compile(r"^(.+)\[(\d+)\]$")


class _Absent:
    """Marca um campo deixado em branco"""

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class ScalarType:
    name: str


@dataclass(frozen=True)
class DynamicArrayType:
    base: str


@dataclass(frozen=True)
class FixedArrayType:
    base: str
    length: int


@dataclass(frozen=True)
class TupleType:
    name: str


@dataclass(frozen=True)
class NestedType:
    """Arrays aninhados e arrays de tuplas: só aceitam JSON"""
    name: str


SolidityType = Union[ScalarType, DynamicArrayType, FixedArrayType, TupleType, NestedType]


def parse_type(solidity_type: str) -> SolidityType:
    solidity_type = solidity_type.strip()

    if solidity_type.count("[") > 1 or solidity_type.startswith("tuple["):
        return NestedType(solidity_type)

    if solidity_type.startswith("tuple"):
        return TupleType(solidity_type)

    if solidity_type.endswith("[]"):
        return DynamicArrayType(solidity_type[:-2])

    match = FIXED_ARRAY_PATTERN.match(solidity_type)
    if match:
        return FixedArrayType(match.group(1), int(match.group(2)))

    return ScalarType(solidity_type)


def _split(value: str, solidity_type: str, base: str) -> List[Any]:
    items = [parse_argument(item, base) for item in value.split(",")]
    if any(item is ABSENT for item in items):
        raise ArgumentFormatError(f"Elemento vazio em {solidity_type}: {value}")
    return items


def parse_argument(value: str, solidity_type: str) -> Any:
    """
    Converte o texto de um parâmetro para o valor esperado pelo tipo.

    Retorna ABSENT para texto vazio; quem monta a chamada deve descartá-lo.
    Inteiros, endereços e bytes seguem como texto (a validação fica para a
    codificação da chamada).
    """
    value = value.strip()
    if not value:
        return ABSENT

    kind = parse_type(solidity_type)

    if isinstance(kind, NestedType):
        try:
            return json.loads(value)
        except ValueError as e:
            raise ArgumentFormatError(
                f"JSON inválido para {kind.name}. Formato esperado: [[1,2],[3,4]] ou estrutura aninhada similar"
            ) from e

    if isinstance(kind, TupleType):
        try:
            parsed = json.loads(value)
        except ValueError:
            parsed = None
        if not isinstance(parsed, (list, dict)):
            raise ArgumentFormatError("JSON inválido para tuple. Formato esperado: [valor1, valor2, ...]")
        return parsed

    if isinstance(kind, DynamicArrayType):
        return _split(value, solidity_type, kind.base)

    if isinstance(kind, FixedArrayType):
        values = _split(value, solidity_type, kind.base)
        if len(values) != kind.length:
            raise ArgumentCountError(
                f"Esperados {kind.length} valores para {solidity_type}, recebidos {len(values)}"
            )
        return values

    if kind.name == "bool":
        return value.lower() == "true" or value == "1"

    return value


def parse_call_arguments(inputs: List[Dict[str, Any]], values: Mapping) -> List[Any]:
    """
    Monta a lista de argumentos de uma chamada a partir dos inputs da ABI.
    Campos em branco são descartados; o erro indica o parâmetro inválido.
    """
    args = []
    for index, param in enumerate(inputs):
        key = param.get("name") or f"param{index}"
        try:
            parsed = parse_argument(values.get(key) or "", param["type"])
        except (ArgumentFormatError, ArgumentCountError) as e:
            e.param = key
            raise
        if parsed is not ABSENT:
            args.append(parsed)
    return args


def _duplicates_named_field(key: Any, item: Any, named: List[Any]) -> bool:
    if not str(key).isdigit():
        return False
    index = int(key)
    return index < len(named) and named[index] == item


def format_result(value: Any) -> Any:
    """Converte o retorno de uma chamada para um formato exibível/serializável"""
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, int):
        return str(value)

    # NamedTuple (ex: decode_tuples=True no web3): campos nomeados
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        if value._fields:
            return {name: format_result(item) for name, item in zip(value._fields, value)}
        return [format_result(item) for item in value]

    if isinstance(value, (list, tuple)):
        return [format_result(item) for item in value]

    if isinstance(value, Mapping):
        named = [item for key, item in value.items() if not str(key).isdigit()]
        # resultado decodificado: o índice N repete o N-ésimo campo nomeado
        return {
            key: format_result(item)
            for key, item in value.items()
            if not _duplicates_named_field(key, item, named)
        }

    return value
