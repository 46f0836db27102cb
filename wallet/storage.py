from pathlib import Path
import json
from typing import Any, Dict

WALLET_DIR = Path("wallet_data")
RECEIPT_PATH = WALLET_DIR / "credential_receipt.json"  # {"blobId":..., "txDigest":..., "walrusUrl":..., "explorerUrl":...}

def save_credential_receipt(receipt: Dict[str, Any], path: Path = RECEIPT_PATH) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(receipt, indent=2, sort_keys=True), encoding="utf-8")

def load_credential_receipt(path: Path = RECEIPT_PATH) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError("No credential receipt stored. Run wallet 'issue_credential' first.")
    return json.loads(path.read_text(encoding="utf-8"))
