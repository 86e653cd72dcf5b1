"""HTTP implementation of the TranscriptionTransport interface."""

import io
import json
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError as PydanticValidationError
from urllib3 import encode_multipart_formdata

from sheet_gen.config import ApiConfig
from sheet_gen.domain.models import MediaDescriptor, TranscriptionResponse
from sheet_gen.exceptions import (
    EmptyResultError,
    NetworkError,
    ServerError,
    TranscriptionTimeoutError,
)
from sheet_gen.logging import setup_logging

from .interfaces import ProgressCallback, TranscriptionTransport

logger = setup_logging()

_TIMEOUT_STATUS_CODES = {408, 504}


class ProgressReader(io.BytesIO):
    """Request body that reports how much of itself has been sent."""

    def __init__(self, body: bytes, on_progress: ProgressCallback):
        super().__init__(body)
        self._total = len(body)
        self._on_progress = on_progress
        self._last_reported = -1

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        if self._total:
            self._report(self.tell() * 100 // self._total)
        return chunk

    def finish(self) -> None:
        """Reports completion if the transfer did not already reach 100."""
        self._report(100)

    def _report(self, percent: int) -> None:
        percent = max(0, min(100, percent))
        if percent <= self._last_reported:
            return
        self._last_reported = percent
        self._on_progress(percent)


class HttpTranscriptionTransport(TranscriptionTransport):
    """Talks to the transcription service over HTTP."""

    def __init__(self, session: requests.Session, config: ApiConfig):
        self._session = session
        self._config = config

    def transcribe_link(self, url: str) -> TranscriptionResponse:
        logger.info("Requesting link transcription", extra={"url": url})
        response = self._send(
            "POST",
            self._config.link_path,
            timeout=self._transcription_timeout,
            json={"url": url},
        )
        return self._parse_transcription(response)

    def transcribe_upload(
        self, descriptor: MediaDescriptor, on_progress: ProgressCallback
    ) -> TranscriptionResponse:
        try:
            data = Path(descriptor.uri).read_bytes()
        except OSError as e:
            logger.exception(
                "Reading upload source failed", extra={"file_name": descriptor.name}
            )
            raise NetworkError(e) from e

        body, content_type = encode_multipart_formdata(
            {
                self._config.upload_field_name: (
                    descriptor.name,
                    data,
                    descriptor.mime_type,
                )
            }
        )
        reader = ProgressReader(body, on_progress)

        logger.info(
            "Uploading file for transcription",
            extra={"file_name": descriptor.name, "size": descriptor.size},
        )
        try:
            response = self._send(
                "POST",
                self._config.upload_path,
                timeout=self._transcription_timeout,
                data=reader,
                headers={"Content-Type": content_type},
            )
        finally:
            reader.finish()
        return self._parse_transcription(response)

    def health_check(self) -> bool:
        try:
            response = self._session.get(
                self._url(self._config.health_path),
                timeout=self._config.request_timeout_seconds,
            )
        except requests.RequestException:
            logger.warning("Health check failed", extra={"base_url": self._config.base_url})
            return False
        return 200 <= response.status_code < 300

    def browse_catalog(self) -> Any:
        """Returns the service's catalog listing."""
        response = self._send(
            "GET",
            self._config.browse_path,
            timeout=self._config.request_timeout_seconds,
        )
        return self._decode_json(response)

    def search(self, keyword: str) -> Any:
        """Runs a keyword search against the service's score catalog."""
        response = self._send(
            "POST",
            self._config.search_path,
            timeout=self._config.request_timeout_seconds,
            json={"keyword": keyword},
        )
        return self._decode_json(response)

    @property
    def _transcription_timeout(self) -> tuple[float, float]:
        return (
            self._config.connect_timeout_seconds,
            self._config.transcription_timeout_seconds,
        )

    def _url(self, path: str) -> str:
        return self._config.base_url.rstrip("/") + path

    def _send(
        self, method: str, path: str, timeout: float | tuple[float, float], **kwargs
    ) -> requests.Response:
        connect, ceiling = timeout if isinstance(timeout, tuple) else (timeout, timeout)
        try:
            response = self._session.request(
                method, self._url(path), timeout=timeout, **kwargs
            )
        except requests.ConnectTimeout as e:
            logger.exception("Connection timed out", extra={"path": path})
            raise TranscriptionTimeoutError(connect, e) from e
        except requests.Timeout as e:
            logger.exception("Request timed out", extra={"path": path})
            raise TranscriptionTimeoutError(ceiling, e) from e
        except requests.RequestException as e:
            logger.exception("Request failed", extra={"path": path})
            raise NetworkError(e) from e

        if response.ok:
            return response

        logger.error(
            "Service returned an error status",
            extra={"path": path, "status_code": response.status_code},
        )
        if response.status_code in _TIMEOUT_STATUS_CODES:
            raise TranscriptionTimeoutError(ceiling)
        detail = _server_detail(response)
        if detail:
            raise ServerError(detail, response.status_code)
        raise NetworkError(requests.HTTPError(f"HTTP {response.status_code}"))

    def _parse_transcription(self, response: requests.Response) -> TranscriptionResponse:
        try:
            parsed = TranscriptionResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.exception("Transcription response unusable")
            raise EmptyResultError(e) from e

        logger.info(
            "Transcription response received",
            extra={
                "has_notation": bool(parsed.musicxml),
                "recognized": parsed.recognized,
            },
        )
        return parsed

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(e) from e


def _server_detail(response: requests.Response) -> str | None:
    """Extracts the structured error message a service put in its body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    for key in ("detail", "message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
        if value:
            return json.dumps(value)
    return None
