"""
Wallet balances — authenticated.
"""

from typing import Optional

from nobitex.models.wallet import GetWalletParams, Wallets
from nobitex.transport.http import HttpClient, RequestDescriptor


class WalletsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def get_wallets(
        self, params: Optional[GetWalletParams] = None, timeout: Optional[float] = None,
    ) -> Wallets:
        """Balances keyed by currency — GET /v2/wallets"""
        return await self._http.execute(RequestDescriptor(
            "GET", "/wallets", version="v2", auth=True,
            body=params or GetWalletParams(), result=Wallets, timeout=timeout,
        ))
