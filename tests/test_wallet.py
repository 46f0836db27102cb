"""Tests for the recipient-side client."""
from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from wallet.issue_credential import issue
from wallet.storage import load_credential_receipt, save_credential_receipt

RECEIPT = {
    "blobId": "Q1",
    "txDigest": "D1",
    "walrusUrl": "https://aggregator.walrus-testnet.walrus.space/v1/blobs/Q1",
    "explorerUrl": "https://suiscan.xyz/testnet/tx/D1",
}


class TestStorage:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "receipt.json"
        save_credential_receipt(RECEIPT, path)
        assert load_credential_receipt(path) == RECEIPT

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_credential_receipt(tmp_path / "none.json")


class TestIssue:

    def test_posts_file_and_saves_receipt(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        artifact = tmp_path / "certificate.pdf"
        artifact.write_bytes(b"%PDF-1.4")
        response = Mock()
        response.json.return_value = {"status": "success", "data": RECEIPT}

        with patch("wallet.issue_credential.requests.post", return_value=response) as post:
            receipt = issue(artifact, "a@b.com", "Alice", "X101", "2024-01-01",
                            issuer_url="http://issuer.test")

        assert receipt == RECEIPT
        url = post.call_args.args[0]
        kwargs = post.call_args.kwargs
        assert url == "http://issuer.test/credentials/issue"
        assert kwargs["data"]["recipientEmail"] == "a@b.com"
        name, _, content_type = kwargs["files"]["file"]
        assert name == "certificate.pdf"
        assert content_type == "application/pdf"
        assert load_credential_receipt(tmp_path / "wallet_data" / "credential_receipt.json") == RECEIPT
