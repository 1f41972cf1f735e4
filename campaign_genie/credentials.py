"""
Credential gate state for a client session
"""

from enum import Enum
from typing import Optional


class CredentialState(str, Enum):
    UNRESOLVED = "unresolved"  # not checked yet
    ABSENT = "absent"
    UNVERIFIED = "unverified"  # selected, no authorized call yet
    VERIFIED = "verified"


class CredentialSession:
    """
    Holds the API key selected for one client and whether it has been proven to work.

    A key becomes VERIFIED on the first successful AI call and is revoked
    back to ABSENT when a call fails with an authorization error.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key: Optional[str] = None
        self.state = CredentialState.UNRESOLVED
        if api_key:
            self.select_key(api_key)

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def resolve(self, default_key: Optional[str] = None) -> bool:
        """
        Settle an unresolved gate, using the server default key if one is configured.

        Returns True if a key is selected afterwards.
        """
        if self.state == CredentialState.UNRESOLVED:
            if default_key and default_key.strip():
                self.select_key(default_key)
            else:
                self.state = CredentialState.ABSENT
        return self.has_selected_key()

    def select_key(self, api_key: str) -> bool:
        """Select a new key. It stays unverified until a call succeeds."""
        if not api_key or not api_key.strip():
            return False
        self._api_key = api_key.strip()
        self.state = CredentialState.UNVERIFIED
        return True

    def has_selected_key(self) -> bool:
        return self.state in (CredentialState.UNVERIFIED, CredentialState.VERIFIED)

    def mark_verified(self):
        if self.state == CredentialState.UNVERIFIED:
            self.state = CredentialState.VERIFIED

    def revoke(self):
        """Drop the key after an authorization failure so the gate shows again"""
        self._api_key = None
        self.state = CredentialState.ABSENT
        print("✗ API key rejected, credential revoked")
