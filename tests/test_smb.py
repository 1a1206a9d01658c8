"""
Test suite for SMB helpers.
"""

from unittest.mock import patch

from svchound.auth import AuthContext
from svchound.transport.smb import smb_connect, smb_os_version

NT = "31d6cfe0d16ae931b73c59d7e0c089c0"


class TestSmbConnect:
    """Tests for smb_connect function"""

    @patch("svchound.transport.smb.SMBConnection")
    def test_password_login(self, mock_smb):
        smb_connect("WEB01", AuthContext(username="admin", password="pw", domain="CORP"))
        mock_smb.return_value.login.assert_called_once_with("admin", "pw", "CORP")

    @patch("svchound.transport.smb.SMBConnection")
    def test_hash_login(self, mock_smb):
        smb_connect("WEB01", AuthContext(username="admin", password="pw", domain="CORP", hashes=NT))
        mock_smb.return_value.login.assert_called_once_with("admin", "", "CORP", lmhash="", nthash=NT)

    @patch("svchound.transport.smb.SMBConnection")
    def test_lm_nt_pair_login(self, mock_smb):
        lm = "aad3b435b51404eeaad3b435b51404ee"
        smb_connect("WEB01", AuthContext(username="admin", domain="CORP", hashes=f"{lm}:{NT}"))
        mock_smb.return_value.login.assert_called_once_with("admin", "", "CORP", lmhash=lm, nthash=NT)

    @patch("svchound.transport.smb.SMBConnection")
    def test_anonymous_login(self, mock_smb):
        smb_connect("WEB01", AuthContext())
        mock_smb.return_value.login.assert_called_once_with("", "", "")

    @patch("svchound.transport.smb.SMBConnection")
    def test_kerberos_login(self, mock_smb):
        smb_connect("WEB01", AuthContext(username="admin", domain="CORP", aes_key="00" * 32))
        mock_smb.return_value.kerberosLogin.assert_called_once()
        mock_smb.return_value.login.assert_not_called()


class TestSmbOsVersion:
    """Tests for smb_os_version function"""

    @patch("svchound.transport.smb.SMBConnection")
    def test_reports_version(self, mock_smb):
        mock_smb.return_value.getServerOSMajor.return_value = 6
        mock_smb.return_value.getServerOSMinor.return_value = 1

        assert smb_os_version("OLD01", AuthContext()) == (6, 1)
        mock_smb.return_value.close.assert_called_once()

    @patch("svchound.transport.smb.SMBConnection")
    def test_no_version(self, mock_smb):
        mock_smb.return_value.getServerOSMajor.return_value = 0
        mock_smb.return_value.getServerOSMinor.return_value = 0

        assert smb_os_version("WEB01", AuthContext()) is None
