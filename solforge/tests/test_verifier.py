"""
Testes da verificação no explorer
Arquivo: tests/test_verifier.py
"""

from unittest.mock import Mock, patch

import pytest
import requests
from eth_abi import encode

from solforge.schema.verification import VerifyContractRequest
from solforge.service.verifier import ContractVerifier, encode_constructor_arguments
from solforge.util.exceptions import VerificationError

OWNER = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

CONSTRUCTOR_ABI = [{
    "type": "constructor",
    "stateMutability": "nonpayable",
    "inputs": [
        {"name": "owner", "type": "address"},
        {"name": "supply", "type": "uint256"},
    ],
}]


@pytest.fixture
def verifier():
    return ContractVerifier(api_key="test-key", base_url="https://api.example.org/v2/api", timeout=10)


@pytest.fixture
def verify_request():
    return VerifyContractRequest(
        contract_address=OWNER,
        chain_id=11155111,
        source_code="// SPDX-License-Identifier: MIT\npragma solidity ^0.8.20;\ncontract MyToken {}",
        contract_name="MyToken",
        compiler_version="0.8.20+commit.a1b79de6",
        abi=CONSTRUCTOR_ABI,
        constructor_args=[OWNER.lower(), "1000"],
    )


def etherscan_response(status, result):
    response = Mock()
    response.json.return_value = {"status": status, "message": "OK", "result": result}
    response.raise_for_status.return_value = None
    return response


# ==================== TESTES DE CODIFICAÇÃO ====================

class TestEncodeConstructorArguments:
    """Argumentos do construtor no formato do Etherscan"""

    def test_matches_eth_abi(self):
        encoded = encode_constructor_arguments(CONSTRUCTOR_ABI, [OWNER.lower(), "1000"])
        assert encoded == encode(["address", "uint256"], [OWNER, 1000]).hex()
        assert not encoded.startswith("0x")

    def test_hex_integer_and_bool(self):
        abi = [{"type": "constructor", "inputs": [
            {"name": "cap", "type": "uint256"},
            {"name": "paused", "type": "bool"},
        ]}]
        assert encode_constructor_arguments(abi, ["0xff", "true"]) == encode(["uint256", "bool"], [255, True]).hex()

    def test_array_from_text(self):
        abi = [{"type": "constructor", "inputs": [{"name": "ids", "type": "uint256[]"}]}]

        from_csv = encode_constructor_arguments(abi, ["1, 2, 3"])
        from_json = encode_constructor_arguments(abi, ["[1, 2, 3]"])

        assert from_csv == from_json == encode(["uint256[]"], [[1, 2, 3]]).hex()

    def test_tuple_by_component_name(self):
        abi = [{"type": "constructor", "inputs": [{
            "name": "config",
            "type": "tuple",
            "components": [
                {"name": "admin", "type": "address"},
                {"name": "fee", "type": "uint16"},
            ],
        }]}]

        encoded = encode_constructor_arguments(abi, [{"admin": OWNER, "fee": "30"}])
        assert encoded == encode(["(address,uint16)"], [(OWNER, 30)]).hex()

    def test_none_without_constructor(self):
        assert encode_constructor_arguments([], ["1"]) is None

    def test_none_without_args(self):
        assert encode_constructor_arguments(CONSTRUCTOR_ABI, []) is None

    def test_count_mismatch(self):
        with pytest.raises(VerificationError):
            encode_constructor_arguments(CONSTRUCTOR_ABI, [OWNER])

    def test_invalid_value(self):
        with pytest.raises(VerificationError):
            encode_constructor_arguments(CONSTRUCTOR_ABI, [OWNER, "muitos"])


# ==================== TESTES DO ENVIO ====================

class TestVerifyContract:
    """Envio para a API v2 do Etherscan"""

    def test_submit_success(self, verifier, verify_request):
        with patch.object(verifier.session, "post", return_value=etherscan_response("1", "guid-123")) as mock_post:
            success, message, guid = verifier.verify_contract(verify_request)

        assert success is True
        assert guid == "guid-123"

        kwargs = mock_post.call_args.kwargs
        assert kwargs["params"] == {"chainid": 11155111}
        assert kwargs["timeout"] == 10
        data = kwargs["data"]
        assert data["compilerversion"] == "v0.8.20+commit.a1b79de6"
        assert data["codeformat"] == "solidity-single-file"
        assert data["optimizationUsed"] == "1"
        assert data["constructorArguments"] == encode(["address", "uint256"], [OWNER, 1000]).hex()

    def test_bad_constructor_args_are_omitted(self, verifier, verify_request):
        verify_request.constructor_args = ["0x123"]

        with patch.object(verifier.session, "post", return_value=etherscan_response("1", "guid-123")) as mock_post:
            success, _, _ = verifier.verify_contract(verify_request)

        assert success is True
        assert "constructorArguments" not in mock_post.call_args.kwargs["data"]

    def test_explorer_rejects(self, verifier, verify_request):
        with patch.object(verifier.session, "post",
                          return_value=etherscan_response("0", "Contract source code already verified")):
            success, message, guid = verifier.verify_contract(verify_request)

        assert success is False
        assert message == "Contract source code already verified"
        assert guid is None

    def test_network_error(self, verifier, verify_request):
        with patch.object(verifier.session, "post", side_effect=requests.ConnectionError("offline")):
            success, message, _ = verifier.verify_contract(verify_request)

        assert success is False
        assert "offline" in message

    def test_unknown_network(self, verifier, verify_request):
        verify_request.chain_id = 999999

        with patch.object(verifier.session, "post") as mock_post:
            success, message, _ = verifier.verify_contract(verify_request)

        assert success is False
        assert "999999" in message
        mock_post.assert_not_called()

    def test_missing_api_key(self, verifier, verify_request):
        verifier.api_key = None

        success, message, _ = verifier.verify_contract(verify_request)

        assert success is False
        assert "ETHERSCAN_API_KEY" in message


class TestVerificationStatus:

    def test_status_pass(self, verifier):
        with patch.object(verifier.session, "get", return_value=etherscan_response("1", "Pass - Verified")) as mock_get:
            success, status = verifier.check_verification_status("guid-123", 1)

        assert success is True
        assert status == "Pass - Verified"
        params = mock_get.call_args.kwargs["params"]
        assert params["action"] == "checkverifystatus"
        assert params["guid"] == "guid-123"

    def test_status_pending(self, verifier):
        with patch.object(verifier.session, "get", return_value=etherscan_response("0", "Pending in queue")):
            assert verifier.check_verification_status("guid-123", 1) == (False, "Pending in queue")

    def test_status_unknown_network(self, verifier):
        assert verifier.check_verification_status("guid-123", 424242) == (False, "Rede não encontrada")
