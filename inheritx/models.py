"""Data records exchanged with the database and over the HTTP API."""

import dataclasses
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, TypeVar, Union

T = TypeVar("T")

DATE_FORMAT = "%d-%m-%Y"


class ClaimStatus(str, Enum):
    """Lifecycle state of a claim."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "ClaimStatus":
        """Read a status name case-insensitively; raise ValueError if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ValueError(f"invalid claim status: {value}")


def format_date(value: datetime) -> str:
    """Format a timestamp as dd-mm-yyyy, in UTC when it carries a zone."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_json(obj: Any) -> Any:
    """Turn records, enums and timestamps into JSON-compatible values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_json(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return _iso(obj)
    if isinstance(obj, (list, tuple)):
        return [to_json(item) for item in obj]
    if isinstance(obj, Mapping):
        return {str(key): to_json(item) for key, item in obj.items()}
    return obj


def _is_optional(hint: Any) -> bool:
    return typing.get_origin(hint) in (Union, types.UnionType) and type(None) in typing.get_args(hint)


def _parse_datetime(value: Any, name: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"field `{name}`: invalid timestamp {value!r}") from None
    else:
        raise ValueError(f"field `{name}`: expected a timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _convert(hint: Any, value: Any, name: str) -> Any:
    origin = typing.get_origin(hint)
    if origin in (Union, types.UnionType):
        if value is None:
            return None
        (inner,) = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _convert(inner, value, name)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"field `{name}`: expected a list")
        (item_hint,) = typing.get_args(hint)
        return [_convert(item_hint, item, name) for item in value]
    if value is None:
        raise ValueError(f"field `{name}`: must not be null")
    if dataclasses.is_dataclass(hint):
        return value if isinstance(value, hint) else from_json(hint, value)
    if isinstance(hint, type) and issubclass(hint, Enum):
        try:
            return hint(value)
        except (ValueError, TypeError):
            raise ValueError(f"field `{name}`: unknown variant {value!r}") from None
    if hint is datetime:
        return _parse_datetime(value, name)
    if hint is bool:
        if not isinstance(value, bool):
            raise ValueError(f"field `{name}`: expected a boolean")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"field `{name}`: expected an integer")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"field `{name}`: expected a number")
        return float(value)
    if hint is str:
        if not isinstance(value, str):
            raise ValueError(f"field `{name}`: expected a string")
        return value
    return value


def from_json(cls: type[T], data: Any) -> T:
    """Build a record from a mapping, checking field types; raise ValueError on bad input."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {cls.__name__}")
    values = {}
    for f in dataclasses.fields(cls):
        hint = f.type
        if f.name in data:
            values[f.name] = _convert(hint, data[f.name], f.name)
        elif _is_optional(hint):
            values[f.name] = None
        else:
            raise ValueError(f"missing field `{f.name}`")
    return cls(**values)


@dataclass
class ActivityLog:
    id: int
    user_id: str
    action: str
    timestamp: datetime
    details: str


@dataclass
class UserActivityResponse:
    id: int
    user_id: str
    date: str
    activity_type: str
    details: str
    action_type: str
    action_link: Optional[str] = None


@dataclass
class UserActivity:
    id: int
    user_id: str
    date: datetime
    activity_type: str
    details: str
    action_type: str
    action_link: Optional[str]
    created_at: datetime

    def to_response(self) -> UserActivityResponse:
        """Present the activity with its date as dd-mm-yyyy."""
        return UserActivityResponse(
            id=self.id,
            user_id=self.user_id,
            date=format_date(self.date),
            activity_type=self.activity_type,
            details=self.details,
            action_type=self.action_type,
            action_link=self.action_link,
        )


@dataclass
class CreateUserActivityRequest:
    user_id: str
    activity_type: str
    details: str
    action_type: str
    action_link: Optional[str] = None


@dataclass
class UserActivitiesResponse:
    activities: list[UserActivityResponse]
    total: int
    page: int
    page_size: int


@dataclass
class Claim:
    id: int
    user_id: int
    amount: float
    status: ClaimStatus
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass
class CreateClaim:
    user_id: int
    amount: float
    description: str


@dataclass
class UpdateClaim:
    status: Optional[ClaimStatus] = None
    description: Optional[str] = None


@dataclass
class KycRecordResponse:
    id: int
    user_id: int
    full_name: str
    date_of_birth: str
    id_type: str
    id_number: str
    address: str
    verification_status: str
    created_at: str
    updated_at: Optional[str] = None


@dataclass
class KycRecord:
    id: int
    user_id: int
    full_name: str
    date_of_birth: str
    id_type: str
    id_number: str
    address: str
    verification_status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_response(self) -> KycRecordResponse:
        """Present the record with its timestamps as dd-mm-yyyy."""
        return KycRecordResponse(
            id=self.id,
            user_id=self.user_id,
            full_name=self.full_name,
            date_of_birth=self.date_of_birth,
            id_type=self.id_type,
            id_number=self.id_number,
            address=self.address,
            verification_status=self.verification_status,
            created_at=format_date(self.created_at),
            updated_at=None if self.updated_at is None else format_date(self.updated_at),
        )


@dataclass
class CreateKycRequest:
    user_id: int
    full_name: str
    date_of_birth: str
    id_type: str
    id_number: str
    address: str


@dataclass
class KycVerificationRequest:
    id: int
    verification_status: str


@dataclass
class Notification:
    id: int
    title: str
    body: str
    is_read: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class CreateNotification:
    title: str
    body: str


@dataclass
class UpdateNotification:
    title: Optional[str] = None
    body: Optional[str] = None
    is_read: Optional[bool] = None


@dataclass
class WithdrawalRecordResponse:
    id: int
    plan_id: str
    wallet_id: str
    amount: int
    payer_name: str
    created_at: str


@dataclass
class WithdrawalRecord:
    id: int
    plan_id: str
    wallet_id: str
    amount: int
    payer_name: str
    created_at: datetime

    def to_response(self) -> WithdrawalRecordResponse:
        """Present the withdrawal with its creation date as dd-mm-yyyy."""
        return WithdrawalRecordResponse(
            id=self.id,
            plan_id=self.plan_id,
            wallet_id=self.wallet_id,
            amount=self.amount,
            payer_name=self.payer_name,
            created_at=format_date(self.created_at),
        )


@dataclass
class CreateWithdrawalRecordRequest:
    user_id: str
    activity_type: str
    details: str
    action_type: str
    action_link: Optional[str] = None


@dataclass
class SingleWithdrawalRecordRequest:
    id: int


@dataclass
class WithdrawalRecordsResponse:
    records: list[WithdrawalRecordResponse] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10