import logging
import re
from typing import Optional

from flask import Flask, request, jsonify

from issuer.config import load_settings
from issuer.errors import IssuanceError, ValidationError
from issuer.issue import IssuanceOrchestrator
from issuer.models import CredentialRequest

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

def parse_credential_request(form) -> CredentialRequest:
    email = (form.get("recipientEmail") or "").strip()
    if not EMAIL_RE.match(email):
        raise ValidationError("Recipient must be a valid email address")

    values = {}
    for field, attr in (("recipientName", "recipient_name"),
                        ("courseName", "course_name"),
                        ("issueDate", "issue_date")):
        value = form.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} should not be empty")
        values[attr] = value
    return CredentialRequest(recipient_email=email, **values)

def create_app(orchestrator: Optional[IssuanceOrchestrator] = None) -> Flask:
    """
    Without an orchestrator, configuration is loaded from the environment and
    the admin key decoded here; either failing raises ConfigurationError and
    the app is never created.
    """
    if orchestrator is None:
        orchestrator = IssuanceOrchestrator.from_settings(load_settings())

    app = Flask(__name__)
    app.extensions["issuance_orchestrator"] = orchestrator

    @app.errorhandler(IssuanceError)
    def handle_issuance_error(err: IssuanceError):
        return jsonify(err.to_dict()), err.http_status

    @app.post("/credentials/issue")
    def issue():
        """
        multipart/form-data:
            file            the credential artifact
            recipientEmail, recipientName, courseName, issueDate
        """
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("File is required")
        cred_request = parse_credential_request(request.form)

        data = upload.read()
        logger.info("Received file: %s, size: %d bytes", upload.filename, len(data))
        logger.info("Recipient Email: %s", cred_request.recipient_email)

        result = orchestrator.issue(data, upload.mimetype, cred_request)
        return jsonify({
            "status": "success",
            "message": "Credential Stored Successfully",
            "data": result.to_dict(),
        }), 200

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    return app

if __name__ == '__main__':
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(IssuanceOrchestrator.from_settings(settings))
    app.run(host='127.0.0.1', port=5001, threaded=True)
