from pydantic import EmailStr, Field
from app.schemas.user import UserBase


class RegisterRequest(UserBase):
    """Identity handed over by the external authentication provider."""
    external_auth_id: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
