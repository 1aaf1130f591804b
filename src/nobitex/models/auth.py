"""
Login request/response models — POST /auth/login/.
"""

from pydantic import BaseModel

CAPTCHA_API = "api"


class AuthenticationParams(BaseModel):
    username: str
    password: str
    captcha: str = CAPTCHA_API
    remember: str = ""


class AuthenticationResponse(BaseModel):
    status: str = ""
    key: str = ""     # sent back as `Authorization: Token <key>`
    device: str = ""
