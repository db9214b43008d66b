from typing import Dict, Optional

from models import ClientAccount


class ClientRegistry:
    """
    Client accounts keyed by client id.
    Not internally locked: callers serialize access through the engine's ledger lock.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create(self, client_id: int) -> ClientAccount:
        """Get existing account or create a zeroed, unlocked one."""
        account = self._accounts.get(client_id)
        if account is None:
            account = ClientAccount(client_id=client_id)
            self._accounts[client_id] = account
        return account

    def find(self, client_id: int) -> Optional[ClientAccount]:
        """Retrieve an existing account without creating it."""
        return self._accounts.get(client_id)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)
