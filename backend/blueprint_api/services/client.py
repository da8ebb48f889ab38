# blueprint_api/services/client.py
from typing import Any, Optional

import httpx

from blueprint_api.config import Config

GENERIC_ERROR = "Backend error"


class BlueprintClientError(Exception):
    pass


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return GENERIC_ERROR
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, str) and error.strip():
        return error
    return GENERIC_ERROR


class BlueprintClient:
    """Calls the generation service's POST /api/blueprint."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 60.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = (base_url or Config.BACKEND_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def generate_blueprint(self, prompt: str) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(f"{self.base_url}/api/blueprint", json={"prompt": prompt})
        except httpx.HTTPError as e:
            raise BlueprintClientError(GENERIC_ERROR) from e

        if not resp.is_success:
            raise BlueprintClientError(_error_message(resp))
        try:
            return resp.json()
        except ValueError as e:
            raise BlueprintClientError(GENERIC_ERROR) from e
