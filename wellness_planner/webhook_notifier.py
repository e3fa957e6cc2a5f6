# wellness_planner/webhook_notifier.py

import os
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger("uvicorn.error")

WEBHOOK_TIMEOUT_SECONDS = 10


def notify_form_submission(payload: Dict[str, Any], webhook_url: Optional[str] = None) -> bool:
    """
    Fire-and-forget POST of a submitted intake form.
    Returns True when the webhook accepted it; failures are only logged.
    """
    webhook_url = webhook_url or os.getenv("INTAKE_WEBHOOK_URL")
    if not webhook_url:
        logger.info("INTAKE_WEBHOOK_URL not set; skipping form submission webhook.")
        return False

    try:
        response = requests.post(
            webhook_url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=WEBHOOK_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error(f"Error connecting to intake webhook: {e}")
        return False

    if not response.ok:
        logger.error(f"Intake webhook rejected submission: {response.status_code} {response.reason}")
        return False

    logger.info("Intake form sent to webhook successfully.")
    return True
