import pytest

from decimal import Decimal

from bonds_core.webapi.webapi import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def power_config():
    """
    price(x) = x + 1, reserve(x) = x^2 / 2 + x
    """
    return {
        "token": "abc",
        "function_type": "power_function",
        "function_parameters": {"m": "1", "n": "1", "c": "1"},
        "reserve_tokens": ["res"],
        "tx_fee_percentage": "1",
        "exit_fee_percentage": "0.5",
        "max_supply": "1000",
        "current_supply": "10",
    }


@pytest.fixture
def swapper_config():
    return {
        "token": "pool",
        "function_type": "swapper_function",
        "reserve_tokens": ["btok", "atok"],
        "tx_fee_percentage": "1",
        "max_supply": "1000000",
        "current_supply": "100",
    }


def test_current_prices(client, power_config):
    resp = client.post("/bond/prices", json={"bond": power_config, "reserve_balances": {"res": "60"}})
    assert resp.status_code == 200
    assert Decimal(resp.get_json()["prices"]["res"]) == Decimal("11")


def test_mint(client, power_config):
    power_config["current_supply"] = "0"
    resp = client.post(
        "/bond/mint",
        json={"bond": power_config, "reserve_balances": {"res": "0"}, "amount": "10"}
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert Decimal(data["prices"]["res"]) == Decimal("60")
    assert Decimal(data["tx_fees"]["res"]) == Decimal("0.6")
    assert data["exceeds_max_supply"] is False


def test_mint_over_max_supply_is_flagged(client, power_config):
    resp = client.post(
        "/bond/mint",
        json={"bond": power_config, "reserve_balances": {"res": "60"}, "amount": "991"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["exceeds_max_supply"] is True


def test_burn(client, power_config):
    resp = client.post(
        "/bond/burn",
        json={"bond": power_config, "reserve_balances": {"res": "60"}, "amount": "4"}
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert Decimal(data["returns"]["res"]) == Decimal("36")
    assert Decimal(data["exit_fees"]["res"]) == Decimal("0.18")
    assert data["sells_allowed"] is True


def test_swap(client, swapper_config):
    """10 atok in at 1% fee against 1000/1000 reserves."""
    resp = client.post(
        "/bond/swap",
        json={
            "bond": swapper_config,
            "reserve_balances": {"atok": "1000", "btok": "1000"},
            "from_amount": "10",
            "from_denom": "atok",
            "to_denom": "btok",
        }
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert Decimal(data["returns"]["btok"]) == Decimal("9.802950")
    assert data["tx_fee"]["denom"] == "atok"
    assert Decimal(data["tx_fee"]["amount"]) == Decimal("0.1")


def test_swap_unknown_reserve(client, swapper_config):
    resp = client.post(
        "/bond/swap",
        json={
            "bond": swapper_config,
            "reserve_balances": {"atok": "1000", "btok": "1000"},
            "from_amount": "10",
            "from_denom": "ctok",
            "to_denom": "btok",
        }
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_reserve_token"


def test_swapper_has_no_spot_price_but_prices_one_token(client, swapper_config):
    resp = client.post(
        "/bond/prices",
        json={"bond": swapper_config, "reserve_balances": {"atok": "1000", "btok": "500"}}
    )
    assert resp.status_code == 200
    prices = resp.get_json()["prices"]
    assert Decimal(prices["atok"]) == Decimal("10")
    assert Decimal(prices["btok"]) == Decimal("5")


@pytest.mark.parametrize(
    "params, code",
    [
        ({"m": "1", "n": "1.5", "c": "0"}, "argument_must_be_integer"),
        ({"m": "1", "n": "2"}, "wrong_parameter_count"),
        ({"m": "-1", "n": "2", "c": "0"}, "negative_argument"),
    ]
)
def test_invalid_parameters_rejected(client, power_config, params, code):
    power_config["function_parameters"] = params
    resp = client.post("/bond/prices", json={"bond": power_config, "reserve_balances": {"res": "60"}})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == code


def test_unknown_function_type(client, power_config):
    power_config["function_type"] = "linear_function"
    resp = client.post("/bond/prices", json={"bond": power_config, "reserve_balances": {}})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_bond"


def test_fee_out_of_range(client, power_config):
    power_config["tx_fee_percentage"] = "101"
    resp = client.post("/bond/prices", json={"bond": power_config, "reserve_balances": {}})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_bond"


def test_validate_report(client, swapper_config):
    resp = client.post("/bond/validate", json={"bond": swapper_config})
    assert resp.status_code == 200
    report = resp.get_json()
    assert report["errors"] == []
    assert report["info"]["param_summary"]["function_type"] == "swapper_function"
    assert report["info"]["reserve_token_count"] == 2


def test_validate_report_lists_errors(client, swapper_config):
    swapper_config["reserve_tokens"] = ["atok"]
    swapper_config["batch_blocks"] = 0
    resp = client.post("/bond/validate", json={"bond": swapper_config})
    assert resp.status_code == 200
    errors = resp.get_json()["errors"]
    assert "SWAPPER: expected 2 reserve tokens, got 1." in errors
    assert "Bond: 'batch_blocks' must be at least 1." in errors


def test_malformed_body(client):
    resp = client.post("/bond/prices", json={"reserve_balances": {}})
    assert resp.status_code == 422


def test_swapper_with_one_reserve_rejected(client, swapper_config):
    swapper_config["reserve_tokens"] = ["atok"]
    resp = client.post("/bond/prices", json={"bond": swapper_config, "reserve_balances": {"atok": "1000"}})
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["error"] == "invalid_bond"
    assert "SWAPPER: expected 2 reserve tokens, got 1." in data["message"]


def test_unevaluable_augmented_curve_rejected(client):
    config = {
        "token": "aug",
        "function_type": "augmented_function",
        "function_parameters": {"d0": "100", "p0": "1", "theta": "1", "kappa": "2"},
        "reserve_tokens": ["res"],
        "max_supply": "1000",
    }
    resp = client.post("/bond/mint", json={"bond": config, "reserve_balances": {"res": "0"}, "amount": "1"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_bond"


def test_large_power_mint(client, power_config):
    power_config["function_parameters"] = {"m": "1", "n": "3", "c": "0"}
    power_config["current_supply"] = "0"
    power_config["max_supply"] = "1000000000000"
    resp = client.post(
        "/bond/mint",
        json={"bond": power_config, "reserve_balances": {"res": "0"}, "amount": "100000000000"}
    )
    assert resp.status_code == 200
    assert Decimal(resp.get_json()["prices"]["res"]) == Decimal("2.5E+43")
