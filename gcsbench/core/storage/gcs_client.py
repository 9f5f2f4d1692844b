"""Single-shot and resumable uploads to Google Cloud Storage.

``GcsClient`` speaks the raw HTTP protocol rather than going through a
storage SDK so that every request of an upload is visible and can be timed.
A resumable session is represented only by its session URL: the client keeps
no per-session state, and the caller passes the URL to every call.

No call is retried. Transport errors from ``requests`` propagate unchanged.
"""

from __future__ import annotations

import logging

import requests

from gcsbench.core.const import (
    CANCEL_SUCCESS_CODES,
    NO_308_HEADER,
    STORAGE_HOST,
)
from gcsbench.core.exceptions import ProtocolError, ValidationError
from gcsbench.core.storage.content_range import (
    STATUS_QUERY_RANGE,
    build_content_range,
    validate_chunk_size,
)
from gcsbench.core.storage.offset_parser import (
    GcsOffsetResponseParser,
    OffsetResponseParser,
    ResumeState,
)
from gcsbench.core.utils.logging_utils import shorten_url

logger = logging.getLogger(__name__)


class GcsClient:
    """HTTP client for GCS object uploads.

    The session passed in is responsible for authorization; in production it
    is a ``google.auth.transport.requests.AuthorizedSession``.
    """

    def __init__(
        self,
        session: requests.Session,
        offset_parser: OffsetResponseParser | None = None,
        storage_host: str = STORAGE_HOST,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: Session used for every request.
            offset_parser: Interprets chunk upload and status query responses.
                Defaults to the GCS parser.
            storage_host: Host of the storage APIs.
            timeout: Per-request timeout in seconds, ``None`` to wait forever.
        """
        self._session = session
        self._offset_parser = offset_parser or GcsOffsetResponseParser()
        self._storage_host = storage_host
        self._timeout = timeout

    def object_url(self, bucket: str, name: str) -> str:
        """URL of an object on the XML API, used for simple uploads."""
        return f"https://{bucket}.{self._storage_host}/{name}"

    def resumable_upload_url(self, bucket: str) -> str:
        """URL of the JSON API endpoint that opens resumable sessions."""
        return (
            f"https://{self._storage_host}/upload/storage/v1/b/{bucket}/o"
            "?uploadType=resumable"
        )

    def upload_object(self, bucket: str, name: str, data: bytes) -> None:
        """Upload ``data`` as ``bucket/name`` with a single PUT.

        Raises:
            ValidationError: If bucket or name is empty.
            ProtocolError: If the service does not reply 200.
        """
        _require_object_target(bucket, name)

        logger.debug("PUT object: bucket=%s name=%s bytes=%d", bucket, name, len(data))
        response = self._session.put(
            self.object_url(bucket, name), data=data, timeout=self._timeout
        )
        if response.status_code != 200:
            raise ProtocolError(
                f"upload failed with status {_status_text(response)}",
                status_code=response.status_code,
            )

    def new_upload_session(self, bucket: str, name: str) -> str:
        """Open a resumable upload session for ``bucket/name``.

        Args:
            bucket: Destination bucket.
            name: Destination object name.

        Returns:
            The session URL that identifies the upload in later calls.

        Raises:
            ValidationError: If bucket or name is empty.
            ProtocolError: If the service does not reply 200 or omits the
                ``Location`` header.
        """
        _require_object_target(bucket, name)

        logger.debug("POST resumable session: bucket=%s name=%s", bucket, name)
        response = self._session.post(
            self.resumable_upload_url(bucket),
            json={"bucket": bucket, "name": name},
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
        )
        if response.status_code != 200:
            raise ProtocolError(
                f"starting an upload failed with status {_status_text(response)}",
                status_code=response.status_code,
            )

        session_url = response.headers.get("Location")
        if not session_url:
            raise ProtocolError(
                "no Location header in the response",
                status_code=response.status_code,
            )

        logger.debug("Opened resumable session %s", shorten_url(session_url))
        return session_url

    def upload_object_part(
        self, session_url: str, offset: int, data: bytes, is_last: bool
    ) -> None:
        """Upload one chunk of a resumable session.

        Non-final chunks must be a positive multiple of
        ``MIN_UPLOAD_CHUNK_SIZE``. The final chunk may have any length; an
        empty final chunk declares the object complete at ``offset`` bytes.

        The offset persisted by the service is not returned; use
        ``get_resume_offset`` to observe it.

        Args:
            session_url: URL returned by ``new_upload_session``.
            offset: Position of the chunk's first byte within the object.
            data: Chunk payload.
            is_last: Whether this chunk completes the object.

        Raises:
            ValidationError: If the chunk violates the size rules. Nothing is
                sent in that case.
            ProtocolError: If the service rejects the chunk or replies with a
                malformed response.
        """
        content_range = build_content_range(offset, len(data), is_last)
        headers = {
            "Content-Range": content_range,
            "Content-Length": str(len(data)),
            NO_308_HEADER: "yes",
        }

        logger.debug(
            "PUT chunk: session=%s range=%s final=%s",
            shorten_url(session_url),
            content_range,
            is_last,
        )
        response = self._session.put(
            session_url, data=data, headers=headers, timeout=self._timeout
        )
        self._offset_parser.parse(response)

    def get_resume_offset(self, session_url: str) -> ResumeState:
        """Ask the service how much of a resumable upload it has stored.

        Args:
            session_url: URL returned by ``new_upload_session``.

        Returns:
            The session's ``ResumeState``.

        Raises:
            ProtocolError: If the service replies with an error or a malformed
                response.
        """
        headers = {
            "Content-Range": STATUS_QUERY_RANGE,
            "Content-Length": "0",
            NO_308_HEADER: "yes",
        }
        response = self._session.put(
            session_url, data=b"", headers=headers, timeout=self._timeout
        )
        state = self._offset_parser.parse(response)
        logger.debug(
            "Resume offset: session=%s offset=%d complete=%s",
            shorten_url(session_url),
            state.offset,
            state.complete,
        )
        return state

    def cancel_upload(self, session_url: str) -> None:
        """Cancel a resumable upload session.

        Raises:
            ProtocolError: If the service replies with anything but 200 or 499.
        """
        response = self._session.delete(session_url, timeout=self._timeout)
        if response.status_code not in CANCEL_SUCCESS_CODES:
            raise ProtocolError(
                f"cancelling an upload failed with status {_status_text(response)}",
                status_code=response.status_code,
            )
        logger.debug("Cancelled resumable session %s", shorten_url(session_url))

    def upload_object_resumable(
        self, bucket: str, name: str, data: bytes, chunk_size: int
    ) -> ResumeState:
        """Upload ``data`` through a new resumable session.

        The session is cancelled if any step fails after it was opened.

        Args:
            bucket: Destination bucket.
            name: Destination object name.
            data: Whole object payload.
            chunk_size: Size of every chunk but the last; must be a positive
                multiple of ``MIN_UPLOAD_CHUNK_SIZE``.

        Returns:
            The final ``ResumeState`` reported by the service.

        Raises:
            ValidationError: If ``chunk_size`` is invalid.
            ProtocolError: If any request is rejected.
        """
        validate_chunk_size(chunk_size)

        session_url = self.new_upload_session(bucket, name)
        try:
            offset = 0
            while True:
                chunk = data[offset : offset + chunk_size]
                is_last = offset + len(chunk) >= len(data)
                self.upload_object_part(session_url, offset, chunk, is_last)
                offset += len(chunk)
                if is_last:
                    break
            return self.get_resume_offset(session_url)
        except Exception:
            try:
                self.cancel_upload(session_url)
            except (ProtocolError, requests.RequestException):
                logger.warning(
                    "Failed to cancel session %s",
                    shorten_url(session_url),
                    exc_info=True,
                )
            raise


def _require_object_target(bucket: str, name: str) -> None:
    if not bucket:
        raise ValidationError("destination bucket must be specified")
    if not name:
        raise ValidationError("object name must be specified")


def _status_text(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".rstrip()
