import math
from decimal import Decimal
from typing import Tuple


class AugmentedCurveHelper:
    """
    Float formulas for the augmented bonding curve, where reserve and supply are tied by the
    invariant V0 = S^kappa / R:
      - reserve(S)  = S^kappa / V0
      - supply(R)   = (V0 * R)^(1/kappa)
      - price(R)    = kappa * R^((kappa-1)/kappa) / V0^(1/kappa)

    The hatch parameters give the initial point of the curve:
      - R0 = d0 * (1 - theta)    (initial reserve after the funding share theta)
      - S0 = d0 / p0             (initial supply at hatch price p0)
      - V0 = S0^kappa / R0

    Everything here is native float arithmetic. Callers convert results back to Decimal with
    'to_rounded_decimal', which fixes them to ROUNDING_PLACES decimal places.
    """
    ROUNDING_PLACES = 6

    @staticmethod
    def initial_reserve(d0: float, theta: float) -> float:
        return d0 * (1 - theta)

    @staticmethod
    def initial_supply(d0: float, p0: float) -> float:
        return d0 / p0

    @staticmethod
    def invariant(reserve: float, supply: float, kappa: float) -> float:
        return math.pow(supply, kappa) / reserve

    @staticmethod
    def invariant_from_hatch(d0: float, p0: float, theta: float, kappa: float) -> float:
        """Computes V0 from the hatch parameters."""
        r0 = AugmentedCurveHelper.initial_reserve(d0, theta)
        s0 = AugmentedCurveHelper.initial_supply(d0, p0)
        return AugmentedCurveHelper.invariant(r0, s0, kappa)

    @staticmethod
    def reserve(supply: float, kappa: float, v0: float) -> float:
        return math.pow(supply, kappa) / v0

    @staticmethod
    def supply(reserve: float, kappa: float, v0: float) -> float:
        return math.pow(v0 * reserve, 1 / kappa)

    @staticmethod
    def spot_price(reserve: float, kappa: float, v0: float) -> float:
        return kappa * math.pow(reserve, (kappa - 1) / kappa) / math.pow(v0, 1 / kappa)

    @staticmethod
    def mint(delta_s: float, reserve: float, supply: float, kappa: float, v0: float) -> Tuple[float, float]:
        """
        Reserve that must be added to mint 'delta_s' tokens.

        :return: (delta_r, realized_price)
        """
        new_reserve = math.pow(supply + delta_s, kappa) / v0
        delta_r = new_reserve - reserve
        realized_price = delta_r / delta_s if delta_s else 0.0
        return delta_r, realized_price

    @staticmethod
    def withdraw(delta_s: float, reserve: float, supply: float, kappa: float, v0: float) -> Tuple[float, float]:
        """
        Reserve released by burning 'delta_s' tokens.

        :return: (delta_r, realized_price)
        """
        new_reserve = math.pow(supply - delta_s, kappa) / v0
        delta_r = reserve - new_reserve
        realized_price = delta_r / delta_s if delta_s else 0.0
        return delta_r, realized_price

    @staticmethod
    def to_rounded_decimal(value: float, places: int = ROUNDING_PLACES) -> Decimal:
        """
        Formats 'value' with a fixed number of decimal places and parses it as a Decimal.
        Raises ValueError on NaN or infinity.
        """
        if not math.isfinite(value):
            raise ValueError(f"non-finite float result {value}")
        return Decimal(f"{value:.{places}f}")
