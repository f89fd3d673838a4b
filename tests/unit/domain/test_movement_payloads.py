from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from herdbook.domain.models.movement_payloads import (
    ExitPayload,
    InvalidPayload,
    SalePayload,
    dump_payload,
    parse_movement_type,
    parse_payload,
    target_lot_id,
)
from herdbook.domain.value_objects.movement_type import ExitReason, MovementType


def test_unknown_movement_type_is_rejected():
    with pytest.raises(InvalidPayload) as exc_info:
        parse_movement_type("teleport")
    assert "teleport" in str(exc_info.value)


def test_sale_payload_accepts_camel_case_keys():
    payload = parse_payload("sale", {"buyerName": "Coop", "salePrice": "5000"})
    assert isinstance(payload, SalePayload)
    assert payload.sale_price == Decimal("5000")
    assert dump_payload(payload) == {"buyer_name": "Coop", "sale_price": "5000"}


def test_fields_of_another_variant_are_rejected():
    with pytest.raises(InvalidPayload) as exc_info:
        parse_payload(MovementType.SALE, {"seller_name": "Someone"})
    assert exc_info.value.errors
    assert exc_info.value.errors[0]["field"] == "seller_name"


def test_required_fields_are_enforced():
    with pytest.raises(InvalidPayload):
        parse_payload("transfer_in", {})
    with pytest.raises(InvalidPayload):
        parse_payload("temporary_out", {"expectedReturnDate": "2025-02-01"})


def test_negative_price_is_rejected():
    with pytest.raises(InvalidPayload):
        parse_payload("purchase", {"purchase_price": "-1"})


def test_exit_defaults_to_other_reason():
    payload = parse_payload("exit", None)
    assert isinstance(payload, ExitPayload)
    assert payload.reason is ExitReason.OTHER


def test_target_lot_only_for_variants_that_carry_one():
    lot_id = uuid4()
    assert target_lot_id(parse_payload("entry", {"lotId": str(lot_id)})) == lot_id
    assert target_lot_id(parse_payload("death", {"cause": "lightning"})) is None
