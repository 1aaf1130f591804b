"""
Wallet models — GET /v2/wallets.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GetWalletParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currencies: Optional[list[str]] = Field(None, alias="assets")
    trade_type: Optional[str] = Field(None, alias="type")  # "spot" | "margin"


class Wallet(BaseModel):
    id: int = 0
    balance: str = "0"
    blocked: str = "0"


class Wallets(BaseModel):
    status: str = ""
    wallets: dict[str, Wallet] = {}
