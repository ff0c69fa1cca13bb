"""User Schemas — registration and login payloads, token responses.

Invariants:
    - Registration fields all required; email syntactically valid
    - mobile accepted as number or string, normalized to digits-only text
    - password limited to 72 UTF-8 bytes (bcrypt input limit), not 72 characters
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

BCRYPT_MAX_BYTES = 72


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
    return v


class RegisterRequest(BaseModel):
    """Registration body."""
    fullname: str = Field(min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)
    age: int = Field(ge=0, le=150)
    gender: str = Field(min_length=1, max_length=30)
    mobile: str = Field(min_length=4, max_length=20)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)

    @field_validator("mobile", mode="before")
    @classmethod
    def normalize_mobile(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip().replace(" ", "").replace("-", "")
            if not v.lstrip("+").isdigit():
                raise ValueError("mobile must contain digits only")
        return v

    @field_validator("fullname", "gender")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class TokenData(BaseModel):
    """Issued session token."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jwtoken: str
    token_type: str = "bearer"
    expires_in: int
