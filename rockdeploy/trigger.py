"""Remote deployment trigger.

The webhosting side unpacks uploaded archives when deployer.php is called
with the current date key.
"""

import logging
from datetime import date

import requests

from rockdeploy.errors import RemoteTriggerError

logger = logging.getLogger(__name__)

DEPLOYER_ENDPOINT = "deployer.php"
REQUEST_TIMEOUT = 30


def deployment_key(today: date | None = None) -> str:
    """Build the deployment key: zero-padded day, month and two-digit year.

    >>> deployment_key(date(2024, 3, 5))
    '050324'
    """
    today = today or date.today()
    return f"{today.day:02d}{today.month:02d}{today.year % 100:02d}"


def build_trigger_url(app_url: str, key: str, frontend: bool = False) -> str:
    """Build the deployer.php URL.

    Args:
        app_url: Base URL of the remote application
        key: Deployment key
        frontend: Mark the deployment as frontend only

    Returns:
        e.g. "https://app.example.com/deployer.php?key=050324&frontend=1"
    """
    url = f"{app_url.rstrip('/')}/{DEPLOYER_ENDPOINT}?key={key}"
    if frontend:
        url += "&frontend=1"
    return url


def trigger_remote_deployment(url: str, timeout: float = REQUEST_TIMEOUT) -> str:
    """Call deployer.php and return the response body.

    Raises:
        RemoteTriggerError: On a non-2xx status, network error or timeout
    """
    logger.info(f"Calling: {url}")
    try:
        response = requests.get(url, timeout=timeout)
    except requests.Timeout as exc:
        raise RemoteTriggerError(f"Request timeout after {timeout:g} seconds") from exc
    except requests.RequestException as exc:
        raise RemoteTriggerError(f"Failed to trigger remote deployment: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise RemoteTriggerError(
            f"HTTP {response.status_code}: {response.reason}",
            status_code=response.status_code,
        )

    logger.info(f"Response: {response.text}")
    return response.text
