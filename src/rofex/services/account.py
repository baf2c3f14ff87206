"""Account and risk queries"""

from rofex.domain.models.responses import (
    AccountPositionResponse,
    AccountReportResponse,
    AccountsResponse,
    DetailedPositionResponse,
)
from rofex.infrastructure.requests import RofexRequestClient
from rofex.shared.constants import (
    PATH_ACCOUNT_POSITION,
    PATH_ACCOUNT_REPORT,
    PATH_ACCOUNTS,
    PATH_DETAILED_POSITION,
)
from rofex.shared.exceptions import ValidationError


class AccountService:
    def __init__(self, client: RofexRequestClient) -> None:
        self.client = client

    async def accounts(self) -> AccountsResponse:
        """Accounts the logged-in user can operate"""
        return await self.client.get_typed(PATH_ACCOUNTS, AccountsResponse)

    async def account_position(self, account: str) -> AccountPositionResponse:
        _require_account(account)
        return await self.client.get_typed(
            PATH_ACCOUNT_POSITION.format(account=account),
            AccountPositionResponse,
        )

    async def detailed_position(self, account: str) -> DetailedPositionResponse:
        _require_account(account)
        return await self.client.get_typed(
            PATH_DETAILED_POSITION.format(account=account),
            DetailedPositionResponse,
        )

    async def account_report(self, account: str) -> AccountReportResponse:
        """Balances, margins and availability per settlement date"""
        _require_account(account)
        return await self.client.get_typed(
            PATH_ACCOUNT_REPORT.format(account=account),
            AccountReportResponse,
        )


def _require_account(account: str) -> None:
    if not account:
        raise ValidationError("account", "required")
