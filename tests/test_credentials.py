from campaign_genie.credentials import CredentialSession, CredentialState
from campaign_genie.errors import AuthError, is_auth_error


def test_new_session_is_unresolved():
    credentials = CredentialSession()

    assert credentials.state == CredentialState.UNRESOLVED
    assert credentials.has_selected_key() is False
    assert credentials.api_key is None


def test_resolve_uses_default_key():
    credentials = CredentialSession()

    assert credentials.resolve("server-key") is True
    assert credentials.state == CredentialState.UNVERIFIED
    assert credentials.api_key == "server-key"


def test_resolve_without_default_key_is_absent():
    credentials = CredentialSession()

    assert credentials.resolve(None) is False
    assert credentials.state == CredentialState.ABSENT


def test_resolve_keeps_an_already_selected_key():
    credentials = CredentialSession("chosen-key")

    credentials.resolve("server-key")

    assert credentials.api_key == "chosen-key"


def test_blank_key_is_not_selected():
    credentials = CredentialSession()
    credentials.resolve(None)

    assert credentials.select_key("   ") is False
    assert credentials.state == CredentialState.ABSENT


def test_successful_call_verifies_only_a_selected_key():
    credentials = CredentialSession("key")
    credentials.mark_verified()
    assert credentials.state == CredentialState.VERIFIED

    revoked = CredentialSession("key")
    revoked.revoke()
    revoked.mark_verified()
    assert revoked.state == CredentialState.ABSENT


def test_revoke_then_reselect():
    credentials = CredentialSession("old-key")
    credentials.mark_verified()

    credentials.revoke()
    assert credentials.has_selected_key() is False
    assert credentials.api_key is None

    assert credentials.select_key("new-key") is True
    assert credentials.state == CredentialState.UNVERIFIED
    assert credentials.api_key == "new-key"


class StatusError(Exception):
    def __init__(self, message, status_code):
        self.status_code = status_code
        super().__init__(message)


def test_auth_error_classification():
    assert is_auth_error(AuthError("anything"))
    assert is_auth_error(StatusError("forbidden", 403))
    assert is_auth_error(RuntimeError("404 Requested entity was not found."))
    assert is_auth_error(RuntimeError("PERMISSION_DENIED: billing disabled"))
    assert not is_auth_error(StatusError("rate limited", 429))
    assert not is_auth_error(RuntimeError("Connection reset by peer"))
