from decimal import Decimal, localcontext

from bonds_core.common.math import DEC_CONTEXT, HUNDRED, round_up
from bonds_core.common.model import Coin


class FeeHelper:
    """Fee computation shared by the bond pricing operations."""

    @staticmethod
    def round_fee(denom: str, amount: Decimal, decimals: int) -> Coin:
        """
        Rounds a fee amount UP to the token's smallest unit.
        """
        return Coin(denom, round_up(amount, decimals))

    @staticmethod
    def fee_for(percentage: Decimal, denom: str, amount: Decimal, decimals: int) -> Coin:
        """
        fee = ceil(percentage / 100 * amount), to 'decimals' places.

        :param percentage: Decimal - fee percentage on a 0-100 scale
        :param denom: str - denomination of the amount
        :param amount: Decimal - the amount the fee is charged on
        :param decimals: int - decimal places of the denomination
        """
        with localcontext(DEC_CONTEXT):
            fee_amount = percentage / HUNDRED * amount
        return FeeHelper.round_fee(denom, fee_amount, decimals)
