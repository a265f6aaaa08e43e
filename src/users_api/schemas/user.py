"""User schemas — Pydantic models for request bodies and responses."""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationInfo,
    conlist,
    field_validator,
)

from users_api.validation.phone import check_phone_number

# Store ids are signed 64-bit integers
DbId = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]

# Decodes the JSON string carried by ``DeleteIds.ids``
ID_LIST = TypeAdapter(list[Annotated[int, Field(strict=True, ge=-(2**63), le=2**63 - 1)]])

PHONE_FORMAT_MESSAGES = {
    "work_phone": "wrong work phone format",
    "home_phone": "wrong home phone format",
    "mobile_phone": "wrong mobile phone format",
}


class UserCreate(BaseModel):
    """Body of ``POST /users``; ``id`` and unknown keys are ignored."""

    # Numbers are accepted for string fields ("zip": 97201)
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: EmailStr
    address: str = Field(min_length=3)
    city: str = Field(min_length=3)
    state: str = Field(min_length=3)
    zip: str = Field(min_length=3)
    billing_name: str = Field(min_length=3)
    billing_address: str = Field(min_length=5)
    billing_city: str = Field(min_length=5)
    billing_state: str = Field(min_length=5)
    billing_zip: str = Field(min_length=3)
    # Nullable so that an absent phone reaches the validator below
    work_phone: Annotated[str, Field(min_length=5)] | None = Field(None, validate_default=True)
    home_phone: Annotated[str, Field(min_length=7)] | None = Field(None, validate_default=True)
    mobile_phone: Annotated[str, Field(min_length=8)] | None = Field(None, validate_default=True)

    @field_validator("work_phone", "home_phone", "mobile_phone")
    @classmethod
    def check_phone(cls, v: str | None, info: ValidationInfo) -> str:
        return check_phone_number(v, PHONE_FORMAT_MESSAGES[info.field_name])


class UserUpdate(BaseModel):
    """Partial update of one user.

    ``email`` is not declared, so it is dropped along with other unknown
    keys; ``id`` selects the row and is never written.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: DbId
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    billing_name: str | None = None
    billing_address: str | None = None
    billing_city: str | None = None
    billing_state: str | None = None
    billing_zip: str | None = None
    work_phone: str | None = None
    home_phone: str | None = None
    mobile_phone: str | None = None

    def changes(self) -> dict[str, str]:
        """Fields to write: everything supplied except ``id``."""
        return self.model_dump(exclude={"id"}, exclude_none=True)


class UsersBatch(BaseModel):
    users: conlist(UserUpdate, min_length=1)


class DeleteIds(BaseModel):
    # JSON-encoded array of ids, e.g. "[2,3]"
    ids: str = Field(min_length=1)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    address: str
    city: str
    state: str
    zip: str
    billing_name: str
    billing_address: str
    billing_city: str
    billing_state: str
    billing_zip: str
    work_phone: str
    home_phone: str
    mobile_phone: str


class StateCount(BaseModel):
    state: str
    # String so large counts survive JSON number precision limits
    count: str


class DeleteResult(BaseModel):
    count: int
