"""
Error body shape. Endpoints disagree on which keys they send, so all are optional.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    status: str = ""   # usually "failed"
    code: str = ""
    message: str = ""
    detail: str = ""
