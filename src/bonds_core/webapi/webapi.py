import dataclasses
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import BondsError, InvalidBond
from bonds_core.common.model import Bond, Coin, FunctionParams
from bonds_core.config import configure_logging, load_settings
from bonds_core.curves.bond_curve import BondCurve
from bonds_core.validation.bond_validator import BondValidator


logger = logging.getLogger(__name__)

settings = load_settings()

info = Info(title="Bonds Pricing API", version="1.0.0")
app = OpenAPI(__name__, info=info)


class BondConfig(BaseModel):
    token: str = Field(description="Symbol of the bonded token")
    name: str = Field("", description="Display name")
    description: str = Field("", description="Free text description")
    creator: str = Field("", description="Creator identity")
    function_type: str = Field(description="power_function, sigmoid_function, swapper_function or augmented_function")
    function_parameters: Dict[str, Decimal] = Field(default_factory=dict, description="Curve parameters by name")
    reserve_tokens: List[str] = Field(description="Reserve token denominations")
    reserve_address: str = Field("", description="Reserve custody address")
    tx_fee_percentage: Decimal = Field(Decimal("0"), description="Transaction fee, 0-100")
    exit_fee_percentage: Decimal = Field(Decimal("0"), description="Exit fee, 0-100")
    fee_address: str = Field("", description="Fee recipient")
    max_supply: Decimal = Field(description="Maximum supply of the bonded token")
    order_quantity_limits: Dict[str, Decimal] = Field(default_factory=dict)
    sanity_rate: Decimal = Field(Decimal("0"))
    sanity_margin_percentage: Decimal = Field(Decimal("0"))
    allow_sells: str = Field("true")
    signers: List[str] = Field(default_factory=list)
    batch_blocks: int = Field(1)
    current_supply: Decimal = Field(Decimal("0"), description="Current supply of the bonded token")
    reserve_decimals: Optional[int] = Field(None, description="Decimal places of the reserve tokens")


class BondRequest(BaseModel):
    bond: BondConfig
    reserve_balances: Dict[str, Decimal] = Field(default_factory=dict, description="Current reserve balances")


class QuantityRequest(BondRequest):
    amount: Decimal = Field(description="Number of bonded tokens to mint / burn")


class SwapRequest(BondRequest):
    from_amount: Decimal = Field(description="Amount going in")
    from_denom: str = Field(description="Reserve token going in")
    to_denom: str = Field(description="Reserve token coming out")


bond_tag = Tag(
    name="Bond Pricing",
    description="Price mints, burns and swaps against a bond configuration and its reserve balances",
)


def _build_bond(config: BondConfig) -> Bond:
    try:
        bond = Bond.create(
            token=config.token,
            name=config.name,
            description=config.description,
            creator=config.creator,
            function_type=FunctionType.from_str(config.function_type),
            function_parameters=FunctionParams.from_dict(config.function_parameters),
            reserve_tokens=config.reserve_tokens,
            reserve_address=config.reserve_address,
            tx_fee_percentage=config.tx_fee_percentage,
            exit_fee_percentage=config.exit_fee_percentage,
            fee_address=config.fee_address,
            max_supply=Coin(config.token, config.max_supply),
            order_quantity_limits=config.order_quantity_limits,
            sanity_rate=config.sanity_rate,
            sanity_margin_percentage=config.sanity_margin_percentage,
            allow_sells=config.allow_sells,
            signers=config.signers,
            batch_blocks=config.batch_blocks,
            reserve_decimals=(
                config.reserve_decimals if config.reserve_decimals is not None
                else settings.default_reserve_decimals
            ),
        )
        return dataclasses.replace(bond, current_supply=Coin(config.token, config.current_supply))
    except (ValueError, NotImplementedError) as e:
        raise InvalidBond([str(e)]) from e


def _priced_curve(config: BondConfig) -> BondCurve:
    bond = _build_bond(config)
    BondValidator.validate_or_raise(bond)
    return BondCurve(bond)


@app.errorhandler(BondsError)
def handle_bonds_error(error: BondsError):
    logger.info("Rejected request: %s", error.message)
    return jsonify({"error": error.code, "message": error.message}), 400


@app.post("/bond/prices", summary="Current Prices", tags=[bond_tag])
def current_prices(body: BondRequest):
    """
    Price per bonded token at the current supply, per reserve token
    """
    curve = _priced_curve(body.bond)
    return jsonify({"prices": curve.get_current_prices_pt(body.reserve_balances)})


@app.post("/bond/mint", summary="Price To Mint", tags=[bond_tag])
def mint(body: QuantityRequest):
    """
    Reserve required to mint 'amount' tokens, with the transaction fees due on top
    """
    curve = _priced_curve(body.bond)
    prices = curve.get_prices_to_mint(body.amount, body.reserve_balances)
    return jsonify({
        "prices": prices,
        "tx_fees": curve.get_tx_fees(prices),
        "exceeds_max_supply": curve.exceeds_max_supply(body.amount),
    })


@app.post("/bond/burn", summary="Returns For Burn", tags=[bond_tag])
def burn(body: QuantityRequest):
    """
    Reserve returned for burning 'amount' tokens, with the exit fees deducted from it
    """
    curve = _priced_curve(body.bond)
    returns = curve.get_returns_for_burn(body.amount, body.reserve_balances)
    return jsonify({
        "returns": returns,
        "exit_fees": curve.get_exit_fees(returns),
        "sells_allowed": curve.bond.allows_sells,
    })


@app.post("/bond/swap", summary="Returns For Swap", tags=[bond_tag])
def swap(body: SwapRequest):
    """
    Output of swapping one reserve token into the other on a swapper bond
    """
    curve = _priced_curve(body.bond)
    result = curve.get_returns_for_swap(Coin(body.from_denom, body.from_amount), body.to_denom, body.reserve_balances)
    return jsonify({
        "returns": result.returns,
        "tx_fee": {"denom": result.tx_fee.denom, "amount": result.tx_fee.amount},
    })


@app.post("/bond/validate", summary="Validate Bond", tags=[bond_tag])
def validate(body: BondRequest):
    """
    Full validation report for a bond configuration
    """
    return jsonify(BondValidator.run_all_validations(_build_bond(body.bond)))


def main():
    configure_logging(settings)
    app.run(host=settings.api_host, port=settings.api_port, debug=settings.api_debug)


if __name__ == "__main__":
    main()
