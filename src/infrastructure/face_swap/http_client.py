"""
HTTP Face Swap Client

Client for the external face swap service.

Request:
    POST <FACE_SWAP_API_URL>
    Authorization: Bearer <FACE_SWAP_API_KEY>
    multipart/form-data: source_image (required), target_image (optional)

Response:
    {"success": true, "result_image": "<data:image/...;base64,...> | <http(s) URL>"}

Status polling (asynchronous jobs, unused by the synchronous pipeline):
    GET <FACE_SWAP_API_URL>/status/<job_id>

Result images fetched by URL are downloaded without the Authorization header.
A transform() call is bounded by FACE_SWAP_TIMEOUT_SECONDS as a whole, not per phase.

Error Handling:
    - Missing key or URL -> TransformationConfigurationError
    - Timeout / network failure -> TransformationConnectionError
    - Non-2xx, success != true, malformed or unsupported payload -> TransformationServiceError
    - Result larger than max_size_bytes or without an image signature -> TransformationServiceError
"""

import asyncio
import base64
import binascii
import logging
import os
import time
from pathlib import Path
from typing import Any, Optional

import httpx

from src.application.models import TransformResult
from src.application.ports import ImageStorageProtocol
from src.domain.shared.exceptions import (
    StorageError,
    TransformationConfigurationError,
    TransformationConnectionError,
    TransformationError,
    TransformationServiceError,
)
from src.domain.submission.constants import FORMAT_TO_EXTENSION
from src.infrastructure.face_swap.base_client import FaceSwapClientBase, detect_image_format

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_SECONDS = 10.0


class HttpFaceSwapClient(FaceSwapClientBase):
    """
    Face swap client calling the external HTTP service.

    Attributes:
        api_key: Bearer token
        api_url: Face swap endpoint
        timeout: Request timeout in seconds (default 30)

    Examples:
        >>> client = HttpFaceSwapClient(storage, api_key="secret", api_url="https://api.example.com/swap")
        >>> result = await client.transform("public/uploads/original/1700000000000-ab.jpg")
        >>> result.swapped_url
        '/uploads/swapped/swapped_1700000002000_c0ffee1234567.jpg'
    """

    simulated = False

    def __init__(
        self,
        storage: ImageStorageProtocol,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize client.

        Args:
            storage: Image storage for reading sources and writing results
            api_key: Bearer token (default from env: FACE_SWAP_API_KEY)
            api_url: Endpoint (default from env: FACE_SWAP_API_URL)
            timeout: Seconds (default from env: FACE_SWAP_TIMEOUT_SECONDS or 30)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(storage)
        self.api_key = api_key or os.getenv("FACE_SWAP_API_KEY")
        self.api_url = api_url or os.getenv("FACE_SWAP_API_URL")
        self.timeout = timeout or float(os.getenv("FACE_SWAP_TIMEOUT_SECONDS", "30"))
        self._transport = transport

    def _client(self, timeout: float, authenticated: bool = True) -> httpx.AsyncClient:
        headers = {"Authorization": f"Bearer {self.api_key}"} if authenticated else {}
        return httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=self._transport,
        )

    def _ensure_configured(self) -> None:
        if not self.api_key:
            raise TransformationConfigurationError("Face swap API key not configured")
        if not self.api_url:
            raise TransformationConfigurationError("Face swap API URL not configured")

    def _read_image(self, path: str) -> bytes:
        try:
            return self.storage.read_bytes(path)
        except (OSError, StorageError) as e:
            raise TransformationError(f"Cannot read image {path}: {e}") from e

    async def transform(
        self, source_path: str, target_path: Optional[str] = None
    ) -> TransformResult:
        """
        Send the source image (and optional target face) to the service.

        Process Flow:
            1. Check configuration
            2. POST multipart source_image (+ target_image)
            3. Check status code and {"success": true}
            4. Decode data-URI or download URL from result_image (no auth header)
            5. Check size and image signature of the result
            6. Store result via storage.save_transformed()

        Steps 2-4 share a single deadline of self.timeout seconds.

        Args:
            source_path: Stored original image
            target_path: Optional stored target face image

        Returns:
            TransformResult with stored result and elapsed milliseconds

        Raises:
            TransformationConfigurationError: Missing key or URL
            TransformationConnectionError: Timeout or network failure
            TransformationServiceError: Error status, malformed response or non-image result
        """
        self._ensure_configured()

        files = {
            "source_image": (Path(source_path).name, self._read_image(source_path)),
        }
        if target_path:
            files["target_image"] = (Path(target_path).name, self._read_image(target_path))

        started = time.perf_counter()

        try:
            image_data = await asyncio.wait_for(self._fetch_result(files), self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Face swap call exceeded {self.timeout}s for {source_path}")
            raise TransformationConnectionError("Face swap API request timed out") from e

        image_format = detect_image_format(image_data)
        if image_format is None:
            logger.error("Face swap API result has no recognizable image signature")
            raise TransformationServiceError("Face swap API did not return an image")
        stored = self.storage.save_transformed(image_data, FORMAT_TO_EXTENSION[image_format])

        processing_time = int((time.perf_counter() - started) * 1000)
        logger.info(f"Face swap API returned {stored.filename} in {processing_time}ms")

        return TransformResult(
            swapped_path=stored.path,
            swapped_filename=stored.filename,
            swapped_url=stored.url,
            processing_time=processing_time,
            simulated=False,
        )

    async def _fetch_result(self, files: dict[str, Any]) -> bytes:
        async with self._client(self.timeout) as client:
            response = await self._send(client, "POST", self.api_url, files=files)
        payload = self._parse_payload(response)
        return await self._resolve_result_image(payload.get("result_image"))

    async def _send(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Face swap API timeout: {method} {url}")
            raise TransformationConnectionError("Face swap API request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Face swap API request error: {method} {url}: {e}")
            raise TransformationConnectionError("Failed to connect to face swap API") from e

    def _parse_payload(self, response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            detail = payload.get("message") if isinstance(payload, dict) else None
            logger.error(f"Face swap API error response: {response.status_code} {detail}")
            raise TransformationServiceError(
                f"API Error: {response.status_code} - {detail or 'Unknown error'}",
                status_code=response.status_code,
            )

        if not isinstance(payload, dict):
            raise TransformationServiceError(
                "Malformed response from face swap API", status_code=response.status_code
            )

        if payload.get("success") is not True:
            raise TransformationServiceError(
                "API returned unsuccessful response", status_code=response.status_code
            )

        return payload

    async def _resolve_result_image(self, result_image: Any) -> bytes:
        if isinstance(result_image, str) and result_image.startswith("data:image"):
            _, _, encoded = result_image.partition(",")
            try:
                data = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                raise TransformationServiceError("Invalid base64 image from API") from e
            if not data:
                raise TransformationServiceError("Empty image from API")
            self._check_result_size(len(data))
            return data

        if isinstance(result_image, str) and result_image.startswith(("http://", "https://")):
            return await self._download(result_image)

        raise TransformationServiceError("Unsupported image format from API")

    def _check_result_size(self, size: int) -> None:
        if size > self.max_size_bytes:
            logger.error(f"Face swap result of {size} bytes exceeds {self.max_size_bytes}")
            raise TransformationServiceError("Result image from API is too large")

    async def _download(self, url: str) -> bytes:
        """
        Stream a result image from a service-provided URL.

        The URL may point at another host (CDN), so the request carries no
        Authorization header. Reading stops once max_size_bytes is exceeded.
        """
        chunks: list[bytes] = []
        received = 0

        async with self._client(self.timeout, authenticated=False) as client:
            try:
                async with client.stream("GET", url) as response:
                    if response.is_error:
                        raise TransformationServiceError(
                            f"Failed to download result image: {response.status_code}",
                            status_code=response.status_code,
                        )
                    async for chunk in response.aiter_bytes():
                        received += len(chunk)
                        self._check_result_size(received)
                        chunks.append(chunk)
            except httpx.TimeoutException as e:
                logger.error(f"Face swap result download timeout: {url}")
                raise TransformationConnectionError("Face swap API request timed out") from e
            except httpx.HTTPError as e:
                logger.error(f"Face swap result download error: {url}: {e}")
                raise TransformationConnectionError("Failed to connect to face swap API") from e

        return b"".join(chunks)

    async def get_processing_status(self, job_id: str) -> dict[str, Any]:
        """
        Query the service for the status of an asynchronous job.

        Args:
            job_id: Service-side job identifier

        Returns:
            Status payload as returned by the service

        Raises:
            TransformationConfigurationError: Missing key or URL
            TransformationConnectionError: Timeout or network failure
            TransformationServiceError: Error status or non-JSON body
        """
        self._ensure_configured()
        url = f"{self.api_url.rstrip('/')}/status/{job_id}"

        async with self._client(STATUS_TIMEOUT_SECONDS) as client:
            response = await self._send(client, "GET", url)

        if response.is_error:
            logger.error(f"Failed to get processing status for {job_id}: {response.status_code}")
            raise TransformationServiceError(
                "Failed to check processing status", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransformationServiceError("Failed to check processing status") from e
