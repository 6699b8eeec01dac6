import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Union

from bonds_core.common.enums import AllowSells, FunctionType
from bonds_core.common.math import HUNDRED, ZERO


@dataclass
class FunctionParam:
    """A single named curve parameter."""
    param: str
    value: Decimal


class FunctionParams(list):
    """Ordered sequence of FunctionParam, convertible to a name -> value mapping."""

    def as_map(self) -> Dict[str, Decimal]:
        # Later entries win on duplicate names.
        return {fp.param: fp.value for fp in self}

    def __str__(self):
        return json.dumps([{"param": fp.param, "value": str(fp.value)} for fp in self])

    @classmethod
    def from_dict(cls, params: Dict[str, Union[Decimal, str, int]]) -> "FunctionParams":
        return cls(FunctionParam(name, Decimal(value)) for name, value in params.items())


@dataclass
class Coin:
    """An amount of a single denomination."""
    denom: str
    amount: Decimal = Decimal("0")

    def is_negative(self) -> bool:
        return self.amount < ZERO

    def __str__(self):
        return f"{self.amount}{self.denom}"


@dataclass
class Bond:
    """
    Configuration and state of a bonded token.

    Pricing operations live on BondCurve and never mutate a Bond; supply and reserve changes
    are applied by whoever owns the ledger.
    """
    token: str
    name: str
    description: str
    creator: str
    function_type: FunctionType
    function_parameters: FunctionParams
    reserve_tokens: List[str]
    reserve_address: str
    tx_fee_percentage: Decimal
    exit_fee_percentage: Decimal
    fee_address: str
    max_supply: Coin
    order_quantity_limits: Dict[str, Decimal] = field(default_factory=dict)
    sanity_rate: Decimal = Decimal("0")
    sanity_margin_percentage: Decimal = Decimal("0")
    allow_sells: Union[AllowSells, bool, str] = AllowSells.TRUE
    signers: List[str] = field(default_factory=list)
    batch_blocks: int = 1
    current_supply: Optional[Coin] = None
    reserve_decimals: int = 6

    def __post_init__(self):
        if not isinstance(self.function_parameters, FunctionParams):
            self.function_parameters = FunctionParams(self.function_parameters)
        if self.current_supply is None:
            self.current_supply = Coin(self.token, Decimal("0"))
        if self.current_supply.amount < ZERO:
            raise ValueError("Current supply must be non-negative.")
        for label, pct in (("tx_fee_percentage", self.tx_fee_percentage),
                           ("exit_fee_percentage", self.exit_fee_percentage)):
            if pct < ZERO or pct > HUNDRED:
                raise ValueError(f"'{label}' must be between 0 and 100.")
        if self.reserve_decimals < 0:
            raise ValueError("Reserve decimals must be non-negative.")

    @classmethod
    def create(
        cls,
        token: str,
        name: str,
        description: str,
        creator: str,
        function_type: FunctionType,
        function_parameters: FunctionParams,
        reserve_tokens: List[str],
        reserve_address: str,
        tx_fee_percentage: Decimal,
        exit_fee_percentage: Decimal,
        fee_address: str,
        max_supply: Coin,
        order_quantity_limits: Optional[Dict[str, Decimal]] = None,
        sanity_rate: Decimal = Decimal("0"),
        sanity_margin_percentage: Decimal = Decimal("0"),
        allow_sells: Union[AllowSells, bool, str] = AllowSells.TRUE,
        signers: Optional[List[str]] = None,
        batch_blocks: int = 1,
        reserve_decimals: int = 6,
    ) -> "Bond":
        """
        Builds a new bond with zero current supply.
        Reserve tokens and order quantity limits are sorted by denomination.
        """
        limits = order_quantity_limits or {}
        return cls(
            token=token,
            name=name,
            description=description,
            creator=creator,
            function_type=function_type,
            function_parameters=FunctionParams(function_parameters),
            reserve_tokens=sorted(reserve_tokens),
            reserve_address=reserve_address,
            tx_fee_percentage=tx_fee_percentage,
            exit_fee_percentage=exit_fee_percentage,
            fee_address=fee_address,
            max_supply=max_supply,
            order_quantity_limits={denom: limits[denom] for denom in sorted(limits)},
            sanity_rate=sanity_rate,
            sanity_margin_percentage=sanity_margin_percentage,
            allow_sells=allow_sells,
            signers=list(signers or []),
            batch_blocks=batch_blocks,
            current_supply=Coin(token, Decimal("0")),
            reserve_decimals=reserve_decimals,
        )

    @property
    def allows_sells(self) -> bool:
        if isinstance(self.allow_sells, str):
            return bool(AllowSells.from_str(self.allow_sells))
        return bool(self.allow_sells)


@dataclass
class SwapResult:
    """Output of a two-asset swap. The fee is returned separately so it can be routed to the fee address."""
    returns: Dict[str, Decimal]
    tx_fee: Coin
