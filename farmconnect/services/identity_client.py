# farmconnect/services/identity_client.py
import requests
from requests import RequestException
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from farmconnect.domain.errors import AppError, AuthenticationError
from farmconnect.domain.schemas import Identity
from farmconnect.utils.settings import FIREBASE_API_KEY, IDENTITY_SERVICE_URL
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


class FirebaseIdentityClient:
    """
    Verifies Firebase ID tokens through the Identity Toolkit REST API
    (accounts:lookup). Transport errors and 5xx answers are retried,
    a 4xx answer means the token is not valid.
    """

    def __init__(self, api_key: str | None = None, base_url: str | None = None, timeout: int = 3):
        self.api_key = api_key or FIREBASE_API_KEY
        self.base_url = (base_url or IDENTITY_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _lookup(self, token: str) -> requests.Response:
        url = f"{self.base_url}/accounts:lookup"
        logger.debug(f"IdentityClient POST {url}")

        resp = requests.post(
            url,
            params={"key": self.api_key},
            json={"idToken": token},
            timeout=self.timeout,
        )
        if resp.status_code >= 500:
            resp.raise_for_status()
        return resp

    def verify_token(self, token: str) -> Identity:
        try:
            resp = self._lookup(token)
        except RequestException as e:
            logger.error(f"Identity service unreachable: {e}")
            raise AppError("Identity service unavailable", status_code=503)

        if resp.status_code != 200:
            logger.warning(f"Token rejected by identity service ({resp.status_code})")
            raise AuthenticationError("Invalid token")

        try:
            users = resp.json().get("users") or []
        except ValueError as e:
            logger.error(f"Identity service sent an unreadable body: {e}")
            raise AppError("Identity service unavailable", status_code=503)

        if not users:
            raise AuthenticationError("Invalid token")

        account = users[0]
        return Identity(uid=account["localId"], email=account.get("email"))
