"""Tests for keyring backend."""

from unittest.mock import MagicMock, patch

import pytest
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError

from gham.credentials import BackendNotAvailableError, CredentialError, KeyringBackend


class TestKeyringBackend:
    """Test KeyringBackend functionality."""

    @pytest.fixture
    def backend(self):
        return KeyringBackend()

    def test_backend_name(self, backend):
        assert backend.name == "keyring"

    @patch("gham.credentials.keyring_backend.keyring")
    def test_available_with_real_backend(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()

        assert backend.available is True

    @patch("gham.credentials.keyring_backend.keyring")
    def test_unavailable_with_fail_backend(self, mock_keyring, backend):
        """Headless systems fall back to the 'fail' keyring."""
        mock_keyring.get_keyring.return_value = fail.Keyring()

        assert backend.available is False

    @patch("gham.credentials.keyring_backend.keyring")
    def test_unavailable_when_keyring_fails(self, mock_keyring, backend):
        mock_keyring.get_keyring.side_effect = Exception("Keyring failed")

        assert backend.available is False

    @patch("gham.credentials.keyring_backend.keyring")
    def test_get_uses_service_and_context_name(self, mock_keyring):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.get_password.return_value = "ghp_work"

        result = KeyringBackend(service="gham-test").get("work")

        assert result == "ghp_work"
        mock_keyring.get_password.assert_called_once_with("gham-test", "work")

    @patch("gham.credentials.keyring_backend.keyring")
    def test_get_not_found(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.get_password.return_value = None

        assert backend.get("work") is None

    @patch("gham.credentials.keyring_backend.keyring")
    def test_get_raises_when_unavailable(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = fail.Keyring()

        with pytest.raises(BackendNotAvailableError) as exc_info:
            backend.get("work")

        assert exc_info.value.suggestion is not None
        mock_keyring.get_password.assert_not_called()

    @patch("gham.credentials.keyring_backend.keyring")
    def test_get_wraps_keyring_error(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.get_password.side_effect = KeyringError("locked")

        with pytest.raises(CredentialError) as exc_info:
            backend.get("work")

        assert exc_info.value.reference == "@keyring:gham/work"

    @patch("gham.credentials.keyring_backend.keyring")
    def test_set(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()

        backend.set("work", "ghp_work")

        mock_keyring.set_password.assert_called_once_with("gham", "work", "ghp_work")

    @patch("gham.credentials.keyring_backend.keyring")
    def test_set_empty_value(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()

        with pytest.raises(ValueError):
            backend.set("work", "")

    @patch("gham.credentials.keyring_backend.keyring")
    def test_set_wraps_keyring_error(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.set_password.side_effect = KeyringError("denied")

        with pytest.raises(CredentialError):
            backend.set("work", "ghp_work")

    @patch("gham.credentials.keyring_backend.keyring")
    def test_delete(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()

        assert backend.delete("work") is True
        mock_keyring.delete_password.assert_called_once_with("gham", "work")

    @patch("gham.credentials.keyring_backend.keyring")
    def test_delete_not_found(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.delete_password.side_effect = PasswordDeleteError("not found")

        assert backend.delete("work") is False

    @patch("gham.credentials.keyring_backend.keyring")
    def test_delete_wraps_keyring_error(self, mock_keyring, backend):
        mock_keyring.get_keyring.return_value = MagicMock()
        mock_keyring.delete_password.side_effect = KeyringError("locked")

        with pytest.raises(CredentialError):
            backend.delete("work")
