"""
Testes do parser de argumentos de chamada e da formatação de resultados
Arquivo: tests/test_argument_codec.py
"""

from collections import namedtuple

import pytest

from solforge.service.argument_codec import (
    ABSENT,
    DynamicArrayType,
    FixedArrayType,
    NestedType,
    ScalarType,
    TupleType,
    format_result,
    parse_argument,
    parse_call_arguments,
    parse_type,
)
from solforge.util.exceptions import ArgumentCountError, ArgumentFormatError


# ==================== TESTES DO TIPO ====================

class TestParseType:
    """Interpretação da string de tipo Solidity"""

    @pytest.mark.parametrize("solidity_type,expected", [
        ("uint256", ScalarType("uint256")),
        ("address", ScalarType("address")),
        ("uint256[]", DynamicArrayType("uint256")),
        ("bytes32[4]", FixedArrayType("bytes32", 4)),
        ("tuple", TupleType("tuple")),
        ("tuple[]", NestedType("tuple[]")),
        ("tuple[2]", NestedType("tuple[2]")),
        ("uint256[][]", NestedType("uint256[][]")),
        ("address[2][]", NestedType("address[2][]")),
    ])
    def test_variants(self, solidity_type, expected):
        assert parse_type(solidity_type) == expected


# ==================== TESTES DE ENTRADA ====================

class TestParseArgument:
    """Conversão do texto digitado para o valor da chamada"""

    def test_bool_true(self):
        assert parse_argument("true", "bool") is True
        assert parse_argument("TRUE", "bool") is True
        assert parse_argument("1", "bool") is True

    def test_bool_false(self):
        assert parse_argument("false", "bool") is False
        assert parse_argument("yes", "bool") is False
        assert parse_argument("0", "bool") is False

    def test_dynamic_array(self):
        assert parse_argument("1,2,3", "uint256[]") == ["1", "2", "3"]

    def test_dynamic_array_trims_elements(self):
        assert parse_argument(" 1 , 2 ", "uint256[]") == ["1", "2"]

    def test_bool_array(self):
        assert parse_argument("true,0,1", "bool[]") == [True, False, True]

    def test_fixed_array(self):
        assert parse_argument("0xa,0xb", "address[2]") == ["0xa", "0xb"]

    def test_fixed_array_wrong_count(self):
        with pytest.raises(ArgumentCountError) as exc:
            parse_argument("1,2", "uint256[3]")
        assert "3" in str(exc.value)

    def test_empty_array_element(self):
        with pytest.raises(ArgumentFormatError):
            parse_argument("1,,2", "uint256[]")

    def test_tuple_requires_json(self):
        with pytest.raises(ArgumentFormatError):
            parse_argument("not json", "tuple")

    def test_tuple_rejects_scalar_json(self):
        with pytest.raises(ArgumentFormatError):
            parse_argument("42", "tuple")

    def test_tuple_json(self):
        assert parse_argument('["0xabc", 10, true]', "tuple") == ["0xabc", 10, True]

    def test_tuple_json_object(self):
        assert parse_argument('{"to": "0xabc", "amount": "5"}', "tuple") == {"to": "0xabc", "amount": "5"}

    def test_nested_array_json(self):
        assert parse_argument("[[1,2],[3,4]]", "uint256[][]") == [[1, 2], [3, 4]]

    def test_tuple_array_json(self):
        assert parse_argument('[["a", 1], ["b", 2]]', "tuple[]") == [["a", 1], ["b", 2]]

    def test_nested_array_invalid_json(self):
        with pytest.raises(ArgumentFormatError) as exc:
            parse_argument("1,2", "uint256[][]")
        assert "uint256[][]" in str(exc.value)

    @pytest.mark.parametrize("value,solidity_type", [
        ("115792089237316195423570985008687907853269984665640564039457584007913129639935", "uint256"),
        ("-5", "int8"),
        ("0xnothex", "address"),
        ("0x1234", "bytes32"),
        ("hello, world", "string"),
    ])
    def test_scalars_pass_through(self, value, solidity_type):
        assert parse_argument(f"  {value} ", solidity_type) == value

    def test_blank_is_absent(self):
        assert parse_argument("   ", "uint256") is ABSENT
        assert parse_argument("", "tuple") is ABSENT
        assert not ABSENT


class TestParseCallArguments:
    """Montagem da lista de argumentos a partir dos inputs da ABI"""

    def test_blank_fields_are_dropped(self):
        inputs = [
            {"name": "to", "type": "address"},
            {"name": "memo", "type": "string"},
            {"name": "amounts", "type": "uint256[]"},
        ]
        values = {"to": "0xabc", "memo": "  ", "amounts": "1,2"}

        assert parse_call_arguments(inputs, values) == ["0xabc", ["1", "2"]]

    def test_unnamed_inputs_use_param_index(self):
        inputs = [{"name": "", "type": "bool"}, {"type": "uint8"}]
        values = {"param0": "true", "param1": "7"}

        assert parse_call_arguments(inputs, values) == [True, "7"]

    def test_missing_values(self):
        inputs = [{"name": "flag", "type": "bool"}]
        assert parse_call_arguments(inputs, {"flag": None}) == []
        assert parse_call_arguments(inputs, {}) == []

    def test_error_names_parameter(self):
        inputs = [{"name": "ok", "type": "uint256"}, {"name": "pair", "type": "uint256[2]"}]

        with pytest.raises(ArgumentCountError) as exc:
            parse_call_arguments(inputs, {"ok": "1", "pair": "1,2,3"})
        assert exc.value.param == "pair"


# ==================== TESTES DE SAÍDA ====================

Balance = namedtuple("Balance", ["owner", "amount"])
Empty = namedtuple("Empty", [])


class TestFormatResult:
    """Formatação do retorno de chamadas para exibição"""

    def test_big_int_to_decimal_text(self):
        assert format_result(2 ** 255) == str(2 ** 255)
        assert format_result(-1) == "-1"

    def test_bool_untouched(self):
        assert format_result(True) is True

    def test_none_and_strings(self):
        assert format_result(None) is None
        assert format_result("abc") == "abc"
        assert format_result(b"\x01") == b"\x01"

    def test_list_and_tuple(self):
        assert format_result([1, (2, 3)]) == ["1", ["2", "3"]]

    def test_named_tuple_projects_fields(self):
        value = Balance(owner="0xabc", amount=10 ** 20)
        assert format_result(value) == {"owner": "0xabc", "amount": str(10 ** 20)}

    def test_named_tuple_without_fields(self):
        assert format_result(Empty()) == []

    def test_nested_named_tuples(self):
        value = [Balance("0x1", 1), Balance("0x2", 2)]
        assert format_result(value) == [
            {"owner": "0x1", "amount": "1"},
            {"owner": "0x2", "amount": "2"},
        ]

    def test_mapping_drops_index_duplicates(self):
        value = {"0": "0xabc", "1": 5, "owner": "0xabc", "amount": 5}
        assert format_result(value) == {"owner": "0xabc", "amount": "5"}

    def test_mapping_keeps_unrelated_digit_keys(self):
        assert format_result({"1": "first", "name": "x"}) == {"1": "first", "name": "x"}

    def test_mapping_keeps_index_with_different_value(self):
        value = {"0": "0xdef", "owner": "0xabc"}
        assert format_result(value) == {"0": "0xdef", "owner": "0xabc"}

    def test_plain_mapping(self):
        assert format_result({"a": 1, "b": {"c": [2]}}) == {"a": "1", "b": {"c": ["2"]}}
