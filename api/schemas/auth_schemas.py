from pydantic import BaseModel

from api.schemas.base import CamelModel


class User(CamelModel):
    id: str
    name: str
    email: str


class CredentialRecord(User):
    password_hash: str

    def public(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class AuthResponse(BaseModel):
    success: bool
    user: User | None = None


class LogoutResponse(BaseModel):
    message: str
