import mimetypes
from pathlib import Path
import argparse

import requests

from wallet.storage import RECEIPT_PATH, save_credential_receipt

ISSUER_URL = "http://127.0.0.1:5001"

def issue(file_path, recipient_email, recipient_name, course_name, issue_date,
          issuer_url=ISSUER_URL, timeout=120):
    path = Path(file_path)
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    form = {
        "recipientEmail": recipient_email,
        "recipientName": recipient_name,
        "courseName": course_name,
        "issueDate": issue_date,
    }
    with path.open("rb") as fh:
        r = requests.post(
            f"{issuer_url}/credentials/issue",
            data=form,
            files={"file": (path.name, fh, content_type)},
            timeout=timeout,
        )
    r.raise_for_status()
    receipt = r.json()["data"]
    save_credential_receipt(receipt)
    return receipt

if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Request a credential from the issuer service.")
    p.add_argument("file")
    p.add_argument("--email", required=True)
    p.add_argument("--name", required=True)
    p.add_argument("--course", required=True)
    p.add_argument("--date", required=True)
    p.add_argument("--issuer_url", default=ISSUER_URL)
    args = p.parse_args()
    receipt = issue(
        args.file,
        recipient_email=args.email,
        recipient_name=args.name,
        course_name=args.course,
        issue_date=args.date,
        issuer_url=args.issuer_url,
    )
    print(f"Credential receipt saved to {RECEIPT_PATH}")
    print("Walrus:", receipt["walrusUrl"])
    print("Explorer:", receipt["explorerUrl"])
