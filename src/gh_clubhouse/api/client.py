"""Shared HTTP client plumbing for the GitHub and Clubhouse APIs."""

import asyncio
import json
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import aiohttp
import requests
from loguru import logger
from pydantic import BaseModel

from .exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
)

USER_AGENT = 'gh-clubhouse/0.1.0'


class APIResponse(BaseModel):
    """Standard API response wrapper."""

    status_code: int
    data: Any
    headers: Dict[str, str]
    success: bool


class APIClient:
    """Minimal JSON API client with synchronous and asynchronous requests.

    Synchronous calls go through a shared ``requests`` session; asynchronous
    calls open an ``aiohttp`` session per request so independent coroutines
    never share connection state.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ):
        """Initialize API client.

        Args:
            base_url: API root URL
            headers: Headers sent with every request
            params: Query parameters sent with every request
            timeout: Request timeout in seconds, None for library defaults
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.default_params = dict(params or {})
        self.headers = {
            'Content-Type': 'application/json',
            'User-Agent': USER_AGENT,
        }
        self.headers.update(headers or {})

        self.session = requests.Session()
        self.session.headers.update(self.headers)

    def _build_url(self, endpoint: str) -> str:
        """Build full API URL from endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full API URL
        """
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _merge_params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(self.default_params)
        merged.update(params or {})
        return merged

    @staticmethod
    def _raise_for_status(
        status: int, reason: str, headers: Dict[str, str], error_data: Any
    ) -> None:
        """Translate an error status into the matching API exception."""
        if status == 429:
            try:
                retry_after = int(headers.get('Retry-After', 60))
            except (TypeError, ValueError):
                # HTTP-date form
                retry_after = 60
            raise RateLimitError(
                f'Rate limit exceeded. Retry after {retry_after} seconds',
                retry_after=retry_after,
                status_code=status,
                response_data=error_data,
            )

        if status == 401:
            raise AuthenticationError(
                'Authentication failed', status_code=status, response_data=error_data
            )

        if status == 404:
            raise NotFoundError(
                'Resource not found', status_code=status, response_data=error_data
            )

        if status >= 400:
            if error_data is not None:
                detail = json.dumps(error_data, indent=2)
            else:
                detail = f'HTTP {status}'
            raise APIError(
                f'{reason or f"HTTP {status}"}:\n{detail}',
                status_code=status,
                response_data=error_data,
            )

    def _handle_response(self, response: requests.Response) -> APIResponse:
        """Handle API response and convert to standard format.

        Args:
            response: Raw HTTP response

        Returns:
            Standardized API response

        Raises:
            APIError: For various API errors
        """
        headers = dict(response.headers)

        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None
            self._raise_for_status(
                response.status_code, response.reason, headers, error_data
            )

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = response.text

        return APIResponse(
            status_code=response.status_code,
            data=data,
            headers=headers,
            success=200 <= response.status_code < 300,
        )

    async def _make_request_async(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
        **kwargs,
    ) -> APIResponse:
        """Make asynchronous API request.

        Args:
            method: HTTP method
            endpoint: API endpoint
            params: Query parameters
            data: JSON request body
            **kwargs: Additional request arguments

        Returns:
            API response
        """
        url = self._build_url(endpoint)
        timeout = aiohttp.ClientTimeout(total=self.timeout) if self.timeout else None

        session_kwargs = {'headers': self.headers}
        if timeout is not None:
            session_kwargs['timeout'] = timeout

        async with aiohttp.ClientSession(**session_kwargs) as session:
            try:
                async with session.request(
                    method=method,
                    url=url,
                    params=self._merge_params(params),
                    json=data,
                    **kwargs,
                ) as response:
                    response_headers = dict(response.headers)
                    try:
                        response_text = await response.text()
                    except UnicodeDecodeError as e:
                        raise APIError(
                            f'Undecodable response body: {e}',
                            status_code=response.status,
                        )

                    try:
                        response_data = (
                            json.loads(response_text) if response_text else None
                        )
                    except ValueError:
                        response_data = response_text

                    if response.status >= 400:
                        self._raise_for_status(
                            response.status,
                            response.reason,
                            response_headers,
                            response_data,
                        )

                    return APIResponse(
                        status_code=response.status,
                        data=response_data,
                        headers=response_headers,
                        success=200 <= response.status < 300,
                    )

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.error(f'Network error during API request: {e}')
                raise APIError(f'Network error: {e}')

    def get(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            **kwargs: Additional request arguments

        Returns:
            API response
        """
        url = self._build_url(endpoint)

        try:
            response = self.session.get(
                url, params=self._merge_params(params), timeout=self.timeout, **kwargs
            )
            return self._handle_response(response)
        except requests.RequestException as e:
            logger.error(f'Network error during GET request: {e}')
            raise APIError(f'Network error: {e}')

    async def get_async(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make asynchronous GET request."""
        return await self._make_request_async('GET', endpoint, params=params, **kwargs)

    async def post_async(
        self, endpoint: str, data: Optional[Any] = None, **kwargs
    ) -> APIResponse:
        """Make asynchronous POST request."""
        return await self._make_request_async('POST', endpoint, data=data, **kwargs)

    def close(self):
        """Close the client session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
