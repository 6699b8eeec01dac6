from decimal import Decimal
from typing import Any, Dict, List

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import BondsError, InvalidBond
from bonds_core.common.math import HUNDRED, ZERO
from bonds_core.common.model import Bond
from bonds_core.curves.base import ANY_NUMBER_OF_RESERVE_TOKENS
from bonds_core.curves.bond_curve import BondCurve
from bonds_core.curves.registry import get_reserve_token_count
from bonds_core.validation.function_params_validator import FunctionParamsValidator


class BondValidator:
    """
    Validator for a whole Bond configuration.
    Performs:
      1) Function parameter checks (count, presence, sign, family restrictions)
      2) Reserve token and order quantity limit checks
      3) Supply and percentage checks
      4) Boundary tests (spot price at supply=0)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    and 'run_all_validations' aggregates them into a single result.
    """

    @staticmethod
    def validate_params(bond: Bond) -> Dict[str, Any]:
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        try:
            FunctionParamsValidator.validate(bond.function_parameters, bond.function_type)
        except BondsError as e:
            errors.append(f"{bond.function_type}: {e.message}")

        info["param_summary"] = {
            "function_type": bond.function_type.value,
            "function_parameters": str(bond.function_parameters),
            "reserve_tokens": ",".join(bond.reserve_tokens),
            "tx_fee_percentage": str(bond.tx_fee_percentage),
            "exit_fee_percentage": str(bond.exit_fee_percentage),
            "max_supply": str(bond.max_supply),
            "current_supply": str(bond.current_supply),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def validate_reserves(bond: Bond) -> Dict[str, Any]:
        """
        Checks that reserve tokens are non-empty, sorted and unique, that their count suits the
        function type, and that order quantity limits are sorted and non-negative.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        reserve_tokens = bond.reserve_tokens
        if not reserve_tokens:
            errors.append("Bond: at least one reserve token is required.")
        if list(reserve_tokens) != sorted(reserve_tokens):
            errors.append("Bond: 'reserve_tokens' must be sorted.")
        if len(set(reserve_tokens)) != len(reserve_tokens):
            errors.append("Bond: 'reserve_tokens' cannot contain duplicates.")

        expected_count = get_reserve_token_count(bond.function_type)
        if expected_count != ANY_NUMBER_OF_RESERVE_TOKENS and len(reserve_tokens) != expected_count:
            errors.append(
                f"{bond.function_type}: expected {expected_count} reserve tokens, got {len(reserve_tokens)}."
            )

        limit_denoms = list(bond.order_quantity_limits)
        if limit_denoms != sorted(limit_denoms):
            errors.append("Bond: 'order_quantity_limits' must be sorted by denomination.")
        for denom, limit in bond.order_quantity_limits.items():
            if limit < ZERO:
                errors.append(f"Bond: order quantity limit for '{denom}' cannot be negative.")

        info["reserve_token_count"] = len(reserve_tokens)
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def validate_amounts(bond: Bond) -> Dict[str, Any]:
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if bond.current_supply.amount < ZERO:
            errors.append("Bond: 'current_supply' cannot be negative.")
        if bond.max_supply.amount < ZERO:
            errors.append("Bond: 'max_supply' cannot be negative.")
        elif bond.current_supply.amount > bond.max_supply.amount:
            errors.append("Bond: 'current_supply' exceeds 'max_supply'.")
        if bond.max_supply.denom != bond.token:
            errors.append(f"Bond: 'max_supply' must be denominated in {bond.token}.")

        for label, pct in (
            ("tx_fee_percentage", bond.tx_fee_percentage),
            ("exit_fee_percentage", bond.exit_fee_percentage),
            ("sanity_margin_percentage", bond.sanity_margin_percentage),
        ):
            if pct < ZERO or pct > HUNDRED:
                errors.append(f"Bond: '{label}' must be between 0 and 100.")

        if bond.tx_fee_percentage + bond.exit_fee_percentage >= HUNDRED:
            warnings.append("Bond: tx and exit fees together take the whole amount.")
        if bond.sanity_rate < ZERO:
            errors.append("Bond: 'sanity_rate' cannot be negative.")
        if bond.batch_blocks < 1:
            errors.append("Bond: 'batch_blocks' must be at least 1.")

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def boundary_tests(bond: Bond) -> Dict[str, Any]:
        """
        Evaluates the spot price at supply=0 for curve families that have one. A curve that
        cannot be evaluated there is reported as an error.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if bond.function_type != FunctionType.SWAPPER:
            try:
                price_at_zero = BondCurve(bond).function.spot_price(Decimal("0"), bond.function_parameters.as_map())
                info["price_at_zero"] = str(price_at_zero)
            except (BondsError, KeyError, ArithmeticError, RuntimeError) as e:
                errors.append(f"{bond.function_type}: cannot evaluate spot price at supply=0: {e}")

        info["boundary_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(bond: Bond) -> Dict[str, Any]:
        """
        Aggregates:
          - param check
          - reserve checks
          - amount checks
          - boundary tests (only when parameters are valid)
        Returns a dict with keys: errors, warnings, info
        """
        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        for check in (BondValidator.validate_params, BondValidator.validate_reserves, BondValidator.validate_amounts):
            step = check(bond)
            results["errors"].extend(step["errors"])
            results["warnings"].extend(step["warnings"])
            results["info"].update(step["info"])

        if not results["errors"]:
            boundary = BondValidator.boundary_tests(bond)
            results["errors"].extend(boundary["errors"])
            results["warnings"].extend(boundary["warnings"])
            results["info"].update(boundary["info"])

        return results

    @staticmethod
    def validate_or_raise(bond: Bond) -> None:
        """
        Raises the parameter validation error directly when the function parameters are invalid,
        otherwise InvalidBond listing every other error found.
        """
        FunctionParamsValidator.validate(bond.function_parameters, bond.function_type)
        results = BondValidator.run_all_validations(bond)
        if results["errors"]:
            raise InvalidBond(results["errors"])
