"""Balance models."""

from typing import Any

from pydantic import BaseModel, Field


class Account(BaseModel):
    """Funds held in a single currency.

    The exchange reports no reserved funds, so ``used`` is always 0.
    """

    free: float | None = None
    used: float | None = 0.0
    total: float | None = None


class Balance(BaseModel):
    """Standardized balance, keyed by currency code.

    Based on CCXT unified balance structure.
    See: https://docs.ccxt.com/#/?id=balance-structure

    ``info`` holds the raw payload of a single-currency request, or the
    list of payloads when every currency was queried.
    """

    accounts: dict[str, Account] = Field(default_factory=dict)
    info: dict[str, Any] | list[dict[str, Any]] | None = None

    @property
    def free(self) -> dict[str, float | None]:
        return {code: account.free for code, account in self.accounts.items()}

    @property
    def used(self) -> dict[str, float | None]:
        return {code: account.used for code, account in self.accounts.items()}

    @property
    def total(self) -> dict[str, float | None]:
        return {code: account.total for code, account in self.accounts.items()}

    def __getitem__(self, code: str) -> Account:
        return self.accounts[code]

    def __contains__(self, code: object) -> bool:
        return code in self.accounts
