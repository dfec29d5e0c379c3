import hashlib
import hmac
import logging

from fastapi import HTTPException, Request

from discourse_relay.core.config import config

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Discourse-Event-Signature"


async def verify_discourse_signature(request: Request) -> bool:
    """
    FastAPI dependency that verifies the Discourse webhook signature.

    Discourse signs the raw body with the webhook secret and sends
    'sha256=<hexdigest>' in the X-Discourse-Event-Signature header. When no
    secret is configured the check is skipped.

    Raises:
        HTTPException: If a secret is configured and the signature is missing or invalid.

    Returns:
        True if the request is accepted.
    """
    secret = config.discourse.webhook_secret
    if not secret:
        logger.debug("DISCOURSE_WEBHOOK_SECRET not set, skipping signature verification.")
        return True

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        logger.warning(f"Received a request without the {SIGNATURE_HEADER} header.")
        raise HTTPException(status_code=401, detail="Missing Discourse webhook signature.")

    payload = await request.body()

    mac = hmac.new(secret.encode(), msg=payload, digestmod=hashlib.sha256)
    expected_signature = f"sha256={mac.hexdigest()}"

    if not hmac.compare_digest(signature, expected_signature):
        logger.error("Invalid webhook signature.")
        raise HTTPException(status_code=401, detail="Invalid Discourse webhook signature.")

    logger.debug("Discourse webhook signature verified successfully.")
    return True
