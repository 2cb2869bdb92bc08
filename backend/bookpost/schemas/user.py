"""User Schemas: registration, login, top-up, and the public user view.

Invariants:
    - password is 6-72 chars (bcrypt ignores bytes past 72)
    - username is stripped, 3-50 chars, no whitespace
    - TopupRequest.amount is a positive integer
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserRegister(BaseModel):
    """Registration body."""
    email: EmailStr
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=72)
    full_name: str | None = Field(None, max_length=200)
    age: int | None = Field(None, ge=0, le=150)
    address: str | None = Field(None, max_length=500)
    birth_date: str | None = Field(None, max_length=20)
    contact_no: str | None = Field(None, max_length=30)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3 or any(ch.isspace() for ch in v):
            raise ValueError("username must be at least 3 characters without spaces")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """Public user view returned after registration."""
    user_id: int
    email: str
    username: str
    full_name: str | None = None
    age: int | None = None
    address: str | None = None
    birth_date: str | None = None
    contact_no: str | None = None
    deposit: int = 0

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            user_id=user.id,
            email=user.email,
            username=user.username,
            full_name=user.full_name,
            age=user.age,
            address=user.address,
            birth_date=user.birth_date,
            contact_no=user.contact_no,
            deposit=user.deposit,
        )


class UserSummary(BaseModel):
    """Minimal author view embedded in comment details."""
    user_id: int
    username: str
    full_name: str | None = None

    @classmethod
    def from_model(cls, user) -> "UserSummary":
        return cls(user_id=user.id, username=user.username, full_name=user.full_name)


class TopupRequest(BaseModel):
    amount: int = Field(gt=0, le=1_000_000_000)


class TopupResponse(BaseModel):
    message: str
    deposit: int
