"""
AllSign credential resolution.

Turns the stored credential fields (an API key plus either a literal base
URL or an environment name) into the base URL and bearer header used by
every request of a run.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .errors import to_api_error
from .transport import RequestSpec, Transport

logger = logging.getLogger(__name__)

PRODUCTION_URL = "https://api.allsign.io"
SANDBOX_URL = "https://sandbox.allsign.io"

CREDENTIAL_TEST_PATH = "/v2/test/security"


class Environment(enum.Enum):
    PRODUCTION = "production"
    SANDBOX = "sandbox"

    @property
    def base_url(self) -> str:
        if self is Environment.SANDBOX:
            return SANDBOX_URL
        return PRODUCTION_URL


@dataclass(frozen=True)
class LiteralEndpoint:
    url: str

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


@dataclass(frozen=True)
class EnvironmentEndpoint:
    environment: Environment = Environment.PRODUCTION

    @property
    def base_url(self) -> str:
        return self.environment.base_url


Endpoint = Union[LiteralEndpoint, EnvironmentEndpoint]


def resolve_endpoint(base_url: Optional[str] = None, environment: Optional[str] = None) -> Endpoint:
    """
    Pick the endpoint from the credential fields.

    A literal base URL wins over an environment name; with neither the
    production host is used.

    Raises:
        ValueError: If the environment name is not recognised
    """
    if base_url and base_url.strip():
        return LiteralEndpoint(base_url.strip())

    if environment and environment.strip():
        try:
            return EnvironmentEndpoint(Environment(environment.strip().lower()))
        except ValueError:
            raise ValueError(
                f"Unknown AllSign environment '{environment}'. Use 'production' or 'sandbox'."
            ) from None

    return EnvironmentEndpoint()


@dataclass(frozen=True)
class ResolvedCredentials:
    """API key and base URL, resolved once per run and read-only afterwards."""

    api_key: str = field(repr=False)
    base_url: str = PRODUCTION_URL

    @property
    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


def resolve_credentials(
    api_key: str,
    base_url: Optional[str] = None,
    environment: Optional[str] = None,
) -> ResolvedCredentials:
    """Resolve stored credential fields into request-ready credentials."""
    endpoint = resolve_endpoint(base_url, environment)
    logger.debug(f"Resolved AllSign endpoint {endpoint!r} -> {endpoint.base_url}")
    return ResolvedCredentials(api_key=api_key, base_url=endpoint.base_url)


def verify_credentials(credentials: ResolvedCredentials, transport: Transport) -> Dict[str, str]:
    """
    Check the API key against the security test endpoint.

    Returns:
        Dict with "status" ("OK" or "Error") and a human readable "message"
    """
    spec = RequestSpec(
        method="GET",
        url=credentials.url(CREDENTIAL_TEST_PATH),
        headers=credentials.auth_headers,
    )
    try:
        transport.request(spec)
    except Exception as e:
        api_error = to_api_error(e)
        logger.error(f"AllSign credential test failed: {api_error}")
        return {"status": "Error", "message": str(api_error)}

    logger.info("AllSign credential test succeeded")
    return {"status": "OK", "message": "Connection successful"}
