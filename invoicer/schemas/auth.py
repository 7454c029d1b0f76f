"""Auth Schemas — login page and login failure payloads."""

from pydantic import BaseModel


class LoginPage(BaseModel):
    page: str = "login"
    callback_url: str | None = None


class LoginFailure(BaseModel):
    message: str
