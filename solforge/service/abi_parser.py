from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

READ_MUTABILITIES = ("view", "pure")


@dataclass
class CategorizedAbi:
    """ABI separada em leitura, escrita, eventos e entradas únicas"""
    read_functions: List[Dict[str, Any]] = field(default_factory=list)
    write_functions: List[Dict[str, Any]] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    constructor: Optional[Dict[str, Any]] = None
    fallback: Optional[Dict[str, Any]] = None
    receive: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def state_mutability(entry: Dict[str, Any]) -> str:
    """
    Mutabilidade da função. ABIs antigas (solc < 0.4.16) não têm
    stateMutability, só os flags constant/payable.
    """
    if entry.get("stateMutability"):
        return entry["stateMutability"]
    if entry.get("constant"):
        return "view"
    if entry.get("payable"):
        return "payable"
    return "nonpayable"


def _by_name(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(entries, key=lambda item: item.get("name", ""))


def categorize_abi(abi: List[Dict[str, Any]]) -> CategorizedAbi:
    """Separa a ABI compilada em funções de leitura/escrita, eventos e especiais"""
    categorized = CategorizedAbi()

    for entry in abi:
        # "function" é o tipo padrão quando omitido
        entry_type = entry.get("type", "function")

        if entry_type == "function":
            if state_mutability(entry) in READ_MUTABILITIES:
                categorized.read_functions.append(entry)
            else:
                categorized.write_functions.append(entry)
        elif entry_type == "event":
            categorized.events.append(entry)
        elif entry_type == "error":
            categorized.errors.append(entry)
        elif entry_type == "constructor":
            categorized.constructor = entry
        elif entry_type == "fallback":
            categorized.fallback = entry
        elif entry_type == "receive":
            categorized.receive = entry

    categorized.read_functions = _by_name(categorized.read_functions)
    categorized.write_functions = _by_name(categorized.write_functions)
    categorized.events = _by_name(categorized.events)
    categorized.errors = _by_name(categorized.errors)
    return categorized


def format_function_signature(entry: Dict[str, Any]) -> str:
    params = ", ".join(
        f"{param['type']} {param.get('name', '')}".rstrip() for param in entry.get("inputs", [])
    )
    outputs = entry.get("outputs") or []
    returns = f" returns ({', '.join(output['type'] for output in outputs)})" if outputs else ""
    return f"{entry.get('name', '')}({params}){returns}"


def get_type_category(solidity_type: str) -> str:
    """Categoria do tipo para validação de entrada na interface"""
    if solidity_type.startswith("uint"):
        return "uint"
    if solidity_type.startswith("int"):
        return "int"
    if solidity_type == "address":
        return "address"
    if solidity_type == "bool":
        return "bool"
    if solidity_type == "string":
        return "string"
    if solidity_type.startswith("bytes"):
        return "bytes"
    if "[]" in solidity_type:
        return "array"
    if solidity_type == "tuple":
        return "tuple"
    return "unknown"
