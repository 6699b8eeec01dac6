import pytest

from decimal import Decimal

from bonds_core.client.parsing import parse_function_params, parse_signers, parse_two_part_coin
from bonds_core.common.errors import InvalidCoinDenomination, InvalidParameterFormat
from bonds_core.common.model import Coin


class TestParseFunctionParams:
    def test_basic(self):
        params = parse_function_params("m:12,n:2,c:100")
        assert params.as_map() == {"m": Decimal("12"), "n": Decimal("2"), "c": Decimal("100")}
        assert [p.name for p in params] == ["m", "n", "c"]

    def test_whitespace_is_trimmed(self):
        params = parse_function_params(" a : 3.5 , b:0.0001 ")
        assert params.as_map() == {"a": Decimal("3.5"), "b": Decimal("0.0001")}

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_gives_empty_set(self, text):
        assert len(parse_function_params(text)) == 0

    def test_repeated_name_keeps_last(self):
        params = parse_function_params("m:1,m:2")
        assert params.as_map() == {"m": Decimal("2")}
        assert len(params) == 1

    @pytest.mark.parametrize(
        "text",
        [
            "m1,n:2",
            "m:abc",
            "m:",
            "m:NaN",
            "m:Infinity",
            "m:1,,n:2",
        ]
    )
    def test_invalid_entries(self, text):
        with pytest.raises(InvalidParameterFormat):
            parse_function_params(text)


class TestParseSigners:
    def test_keeps_order(self):
        assert parse_signers("carol, alice,bob") == ["carol", "alice", "bob"]

    def test_single(self):
        assert parse_signers("alice") == ["alice"]

    @pytest.mark.parametrize("text", ["", "alice,,bob", "alice, "])
    def test_empty_entry_rejected(self, text):
        with pytest.raises(InvalidParameterFormat):
            parse_signers(text)


class TestParseTwoPartCoin:
    def test_valid(self):
        assert parse_two_part_coin("10.5", "res") == Coin("res", Decimal("10.5"))
        assert parse_two_part_coin("0", "ibc/abc123") == Coin("ibc/abc123", Decimal("0"))

    @pytest.mark.parametrize("denom", ["", "ab", "Res", "1res", "re-s", "x" * 129])
    def test_invalid_denom(self, denom):
        with pytest.raises(InvalidCoinDenomination):
            parse_two_part_coin("1", denom)

    @pytest.mark.parametrize("amount", ["abc", "-1", "Infinity", ""])
    def test_invalid_amount(self, amount):
        with pytest.raises(InvalidParameterFormat):
            parse_two_part_coin(amount, "res")
