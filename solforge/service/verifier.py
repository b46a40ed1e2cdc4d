import json
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

import requests
from eth_abi import encode
from eth_abi.exceptions import EncodingError
from web3 import Web3

from ..config.networks import get_network
from ..config.settings import settings
from ..schema.verification import VerifyContractRequest
from ..util.exceptions import VerificationError
from ..util.logger import logger

ARRAY_SUFFIX_PATTERN = re.compile(r"^(.*)\[(\d*)\]$")


def _abi_type(param: Dict[str, Any]) -> str:
    """Tipo canônico para o eth_abi: tuple vira (t1,t2,...)"""
    solidity_type = param["type"]
    if solidity_type.startswith("tuple"):
        components = ",".join(_abi_type(component) for component in param.get("components", []))
        return f"({components}){solidity_type[len('tuple'):]}"
    return solidity_type


def _coerce(value: Any, param: Dict[str, Any]) -> Any:
    solidity_type = param["type"]

    match = ARRAY_SUFFIX_PATTERN.match(solidity_type)
    if match:
        if isinstance(value, str):
            value = json.loads(value) if value.strip().startswith("[") else [v.strip() for v in value.split(",")]
        inner = dict(param, type=match.group(1))
        return [_coerce(item, inner) for item in value]

    if solidity_type == "tuple":
        if isinstance(value, str):
            value = json.loads(value)
        components = param.get("components", [])
        if isinstance(value, Mapping):
            value = [value[component["name"]] for component in components]
        return tuple(_coerce(item, component) for item, component in zip(value, components))

    if solidity_type.startswith(("uint", "int")):
        if isinstance(value, int):
            return value
        text = str(value).strip()
        return int(text, 16) if text.lower().startswith("0x") else int(text)

    if solidity_type == "bool":
        return value if isinstance(value, bool) else str(value).strip().lower() in ("true", "1")

    if solidity_type == "address":
        return Web3.to_checksum_address(value)

    if solidity_type.startswith("bytes"):
        return value if isinstance(value, bytes) else Web3.to_bytes(hexstr=value)

    return value


def encode_constructor_arguments(abi: List[Dict[str, Any]], args: List[Any]) -> Optional[str]:
    """
    Codifica os argumentos do construtor (hex sem 0x, como o Etherscan espera).
    Retorna None quando não há construtor com parâmetros.
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    if not constructor or not constructor.get("inputs") or not args:
        return None

    inputs = constructor["inputs"]
    if len(args) != len(inputs):
        raise VerificationError(f"O construtor espera {len(inputs)} argumentos, recebidos {len(args)}")

    try:
        types = [_abi_type(param) for param in inputs]
        values = [_coerce(value, param) for value, param in zip(args, inputs)]
        return encode(types, values).hex()
    except (ValueError, TypeError, KeyError, EncodingError) as e:
        raise VerificationError(f"Falha ao codificar argumentos do construtor: {e}") from e


class ContractVerifier:
    """Envio de verificação single-file para a API v2 do Etherscan"""

    def __init__(self, api_key: str = None, base_url: str = None, timeout: Optional[float] = None):
        self.api_key = api_key or settings.ETHERSCAN_API_KEY
        self.base_url = base_url or settings.ETHERSCAN_V2_BASE_URL
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self.session = requests.Session()

    def verify_contract(self, request: VerifyContractRequest) -> Tuple[bool, str, Optional[str]]:
        """
        Envia o fonte achatado para verificação
        Retorna: (sucesso, mensagem, guid)
        """
        if not get_network(request.chain_id):
            return False, f"Rede não encontrada para chain ID {request.chain_id}", None

        if not self.api_key:
            return False, "ETHERSCAN_API_KEY não configurada. Adicione nas variáveis de ambiente.", None

        compiler_version = request.compiler_version
        if not compiler_version.startswith("v"):
            compiler_version = f"v{compiler_version}"

        params = {
            "chainid": str(request.chain_id),
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": request.contract_address,
            "sourceCode": request.source_code,
            "codeformat": "solidity-single-file",
            "contractname": request.contract_name,
            "compilerversion": compiler_version,
            "optimizationUsed": "1" if request.optimization_enabled else "0",
            "runs": str(request.optimization_runs),
            "evmversion": request.evm_version,
            "apikey": self.api_key,
        }

        try:
            constructor_arguments = encode_constructor_arguments(request.abi, request.constructor_args)
        except VerificationError as e:
            # segue sem os argumentos; o explorer indica o problema
            logger.warning(str(e))
            constructor_arguments = None

        if constructor_arguments:
            params["constructorArguments"] = constructor_arguments

        logger.info(
            f"[Etherscan V2] Verificação: chain {request.chain_id} - {request.contract_address} - "
            f"{request.contract_name} - {compiler_version}"
        )

        try:
            response = self.session.post(
                self.base_url,
                params={"chainid": request.chain_id},
                data=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Erro na verificação: {e}")
            return False, str(e), None

        if data.get("status") == "1":
            return True, "Verificação enviada com sucesso", data.get("result")

        return False, data.get("result") or "Falha na verificação", None

    def check_verification_status(self, guid: str, chain_id: int) -> Tuple[bool, str]:
        """
        Consulta o status de uma verificação enviada
        Retorna: (sucesso, status)
        """
        if not get_network(chain_id):
            return False, "Rede não encontrada"

        if not self.api_key:
            return False, "API key não configurada"

        try:
            response = self.session.get(
                self.base_url,
                params={
                    "chainid": chain_id,
                    "module": "contract",
                    "action": "checkverifystatus",
                    "guid": guid,
                    "apikey": self.api_key,
                },
                timeout=self.timeout
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Erro ao consultar status da verificação: {e}")
            return False, "Falha ao consultar status"

        return data.get("status") == "1", data.get("result") or "Status desconhecido"


contract_verifier = ContractVerifier()
