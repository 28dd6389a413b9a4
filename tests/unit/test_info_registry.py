"""Tests for InfoRegistry /info normalization"""

import pytest

from anchor_transfers.domain.models import (
    ComplexFee,
    Direction,
    EndpointInfo,
    NoFee,
    SimpleFee,
    UnrecognizedFee,
)
from anchor_transfers.shared.exceptions import ServerDataError
from anchor_transfers.transfers.info_registry import InfoRegistry, parse_info


@pytest.mark.unit
def test_parse_is_idempotent(raw_info):
    assert parse_info(raw_info) == parse_info(raw_info)


@pytest.mark.unit
def test_parse_splits_assets_by_direction(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert set(info.deposit) == {"USD", "EUR", "GBP", "JPY"}
    assert set(info.withdraw) == {"USD", "ETH"}
    assert info.lookup(Direction.DEPOSIT, "USD").authentication_required is True
    assert info.lookup(Direction.DEPOSIT, "EUR").authentication_required is False


@pytest.mark.unit
def test_lookup_returns_none_for_missing_asset(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert info.lookup(Direction.DEPOSIT, "ETH") is None
    assert info.lookup(Direction.WITHDRAW, "ETH") is not None


@pytest.mark.unit
def test_fee_fields_become_simple_fee(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert info.deposit["USD"].fee == SimpleFee(percent=1.0, fixed=5.0)
    assert info.withdraw["USD"].fee == SimpleFee(percent=None, fixed=2.5)


@pytest.mark.unit
def test_enabled_fee_endpoint_makes_complex_fee(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert info.deposit["EUR"].fee == ComplexFee()


@pytest.mark.unit
def test_no_fee_information_without_fee_endpoint(raw_info):
    del raw_info["fee"]

    info = InfoRegistry.parse(raw_info)

    assert info.deposit["EUR"].fee == NoFee()
    assert info.fee_endpoint == EndpointInfo()


@pytest.mark.unit
def test_explicit_fee_object_wins(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert info.deposit["GBP"].fee == NoFee()
    assert info.withdraw["ETH"].fee == ComplexFee()
    assert info.deposit["JPY"].fee == UnrecognizedFee(type="tiered")


@pytest.mark.unit
def test_asset_metadata_passes_through(raw_info):
    info = InfoRegistry.parse(raw_info)

    usd = info.deposit["USD"]
    assert usd.asset_code == "USD"
    assert usd.min_amount == 0.1
    assert usd.max_amount == 1000.0
    assert "email_address" in usd.fields
    assert "bank_account" in info.withdraw["USD"].types
    assert info.withdraw["ETH"].enabled is False
    assert info.withdraw["ETH"].extra == {"network": "mainnet"}


@pytest.mark.unit
def test_endpoint_advertisements(raw_info):
    info = InfoRegistry.parse(raw_info)

    assert info.fee_endpoint == EndpointInfo(enabled=True)
    assert info.transaction_endpoint.authentication_required is True


@pytest.mark.unit
def test_empty_info_parses_to_empty_directions():
    info = InfoRegistry.parse({})

    assert info.deposit == {}
    assert info.withdraw == {}


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        [],
        "not json",
        {"deposit": []},
        {"deposit": {"USD": {"enabled": "sometimes"}}},
        {"withdraw": {"USD": {"fee_fixed": "lots"}}},
    ],
)
def test_malformed_info_raises_server_data_error(raw):
    with pytest.raises(ServerDataError):
        InfoRegistry.parse(raw)


@pytest.mark.unit
def test_unusual_numbers_pass_through_without_failing_the_parse(raw_info):
    raw_info["deposit"]["USD"]["min_amount"] = -1
    raw_info["withdraw"]["USD"]["fee_fixed"] = "-0.5"

    info = InfoRegistry.parse(raw_info)

    assert info.deposit["USD"].min_amount == -1.0
    assert info.withdraw["USD"].fee == SimpleFee(percent=None, fixed=-0.5)
    assert set(info.deposit) == {"USD", "EUR", "GBP", "JPY"}
