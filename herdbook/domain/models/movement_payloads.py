from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from herdbook.domain.value_objects.movement_type import ExitReason, MovementType, TemporaryType


class InvalidPayload(ValueError):
    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class _Payload(BaseModel):
    # Accepts both snake_case and camelCase keys; always dumps snake_case
    model_config = ConfigDict(
        extra="forbid", frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class EntryPayload(_Payload):
    origin: str | None = None
    lot_id: UUID | None = None


class ExitPayload(_Payload):
    reason: ExitReason = ExitReason.OTHER
    destination: str | None = None


class BirthPayload(_Payload):
    birth_weight_kg: Decimal | None = Field(default=None, gt=0)
    lot_id: UUID | None = None


class DeathPayload(_Payload):
    cause: str | None = None


class SalePayload(_Payload):
    buyer_name: str | None = None
    buyer_farm_id: str | None = None
    sale_price: Decimal | None = Field(default=None, ge=0)


class PurchasePayload(_Payload):
    seller_name: str | None = None
    seller_farm_id: str | None = None
    purchase_price: Decimal | None = Field(default=None, ge=0)
    lot_id: UUID | None = None


class TransferInPayload(_Payload):
    origin_farm_id: str = Field(min_length=1)
    lot_id: UUID | None = None


class TransferOutPayload(_Payload):
    destination_farm_id: str = Field(min_length=1)


class TemporaryOutPayload(_Payload):
    temporary_type: TemporaryType
    expected_return_date: date | None = None


class TemporaryReturnPayload(_Payload):
    actual_return_date: date | None = None
    lot_id: UUID | None = None


MovementPayload = (
    EntryPayload
    | ExitPayload
    | BirthPayload
    | DeathPayload
    | SalePayload
    | PurchasePayload
    | TransferInPayload
    | TransferOutPayload
    | TemporaryOutPayload
    | TemporaryReturnPayload
)

PAYLOAD_MODELS: dict[MovementType, type[_Payload]] = {
    MovementType.ENTRY: EntryPayload,
    MovementType.EXIT: ExitPayload,
    MovementType.BIRTH: BirthPayload,
    MovementType.DEATH: DeathPayload,
    MovementType.SALE: SalePayload,
    MovementType.PURCHASE: PurchasePayload,
    MovementType.TRANSFER_IN: TransferInPayload,
    MovementType.TRANSFER_OUT: TransferOutPayload,
    MovementType.TEMPORARY_OUT: TemporaryOutPayload,
    MovementType.TEMPORARY_RETURN: TemporaryReturnPayload,
}


def parse_movement_type(value: str) -> MovementType:
    try:
        return MovementType(value)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in MovementType)
        raise InvalidPayload(
            f"Unknown movement type '{value}'. Must be one of: {allowed}"
        ) from exc


def parse_payload(movement_type: MovementType | str, data: dict | None) -> MovementPayload:
    """Validate `data` against the payload variant of `movement_type`.

    Fields that belong to another movement type are rejected.
    """
    movement_type = parse_movement_type(movement_type)
    model = PAYLOAD_MODELS[movement_type]
    try:
        return model.model_validate(data or {})
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise InvalidPayload(
            f"Invalid payload for {movement_type.value} movement", errors=errors
        ) from exc


def dump_payload(payload: MovementPayload) -> dict:
    return payload.model_dump(mode="json", exclude_none=True)


def target_lot_id(payload: MovementPayload) -> UUID | None:
    """Lot an arriving animal should join, for payload variants that carry one."""
    return getattr(payload, "lot_id", None)
