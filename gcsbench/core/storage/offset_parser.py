"""Interpretation of resumable upload status responses.

Both a chunk upload and a status query are answered with either the final
object resource (the upload is complete) or a "resume incomplete" reply
carrying the persisted byte range. With ``X-GUploader-No-308: yes`` set on the
request, GCS reports the latter as HTTP 200 plus an
``X-HTTP-Status-Code-Override: 308`` header instead of a real 308, so the
status code alone does not tell the two shapes apart.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

import requests
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from gcsbench.core.const import (
    OFFSET_SUCCESS_CODES,
    RESUME_INCOMPLETE_STATUS,
    STATUS_OVERRIDE_HEADER,
)
from gcsbench.core.exceptions import ProtocolError

_RANGE_PATTERN = re.compile(r"^bytes=0-(\d+)$")


@dataclass(frozen=True)
class ResumeState:
    """Server-side progress of a resumable upload session.

    Attributes:
        offset: When ``complete`` is false, the number of bytes the service
            has durably received, which is also the offset to resume from.
            When ``complete`` is true, the total size of the stored object.
        complete: Whether the object has been fully stored.
    """

    offset: int
    complete: bool


class ObjectResource(BaseModel):
    """Subset of the object resource returned when an upload completes."""

    model_config = ConfigDict(extra="ignore")

    size: int
    bucket: str | None = None
    name: str | None = None
    generation: str | None = None
    md5Hash: str | None = None
    contentType: str | None = None


class OffsetResponseParser(ABC):
    """Strategy for turning an upload or status response into a ResumeState."""

    @abstractmethod
    def parse(self, response: requests.Response) -> ResumeState:
        """Interpret ``response``.

        Raises:
            ProtocolError: If the response does not match the protocol.
        """
        ...


class GcsOffsetResponseParser(OffsetResponseParser):
    """Parser for the GCS JSON API resumable upload protocol."""

    def parse(self, response: requests.Response) -> ResumeState:
        """Interpret a GCS chunk upload or status query response.

        Args:
            response: Response to a ``PUT`` on the session URL.

        Returns:
            ``ResumeState(size, True)`` when the upload is complete, otherwise
            ``ResumeState(next_offset, False)``.

        Raises:
            ProtocolError: If the status is not 200/201, the completion body
                is not a valid object resource, or the ``Range`` header is
                malformed.
        """
        if response.status_code not in OFFSET_SUCCESS_CODES:
            raise ProtocolError(
                "chunk upload failed with status "
                f"{response.status_code} {response.reason or ''}".rstrip(),
                status_code=response.status_code,
            )

        if response.headers.get(STATUS_OVERRIDE_HEADER) != RESUME_INCOMPLETE_STATUS:
            # The upload has completed; the body describes the stored object.
            return ResumeState(offset=self._parse_object_size(response), complete=True)

        range_header = response.headers.get("Range")
        if not range_header:
            # Nothing has been persisted yet.
            return ResumeState(offset=0, complete=False)

        match = _RANGE_PATTERN.match(range_header)
        if match is None:
            raise ProtocolError(
                f"GCS sent a malformed Range header: {range_header!r}",
                status_code=response.status_code,
            )

        # Range is inclusive: bytes=0-N means N+1 bytes are stored.
        return ResumeState(offset=int(match.group(1)) + 1, complete=False)

    @staticmethod
    def _parse_object_size(response: requests.Response) -> int:
        try:
            resource = ObjectResource.model_validate_json(response.content)
        except PydanticValidationError as exc:
            raise ProtocolError(
                "GCS response is not a valid object resource",
                status_code=response.status_code,
            ) from exc
        return resource.size
