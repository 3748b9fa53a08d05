"""Multipart upload handling for the file endpoints."""

from dataclasses import dataclass
from typing import Optional

from flask import request

from chat_backend.conf.config import Config
from chat_backend.src.api.middleware.exceptions import UploadTooLarge, ValidationError


@dataclass
class Upload:
    """A file part read from a multipart request.

    Attributes:
        data: File bytes
        file_name: Client-supplied file name
        mime_type: Content type of the part
    """

    data: bytes
    file_name: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)


def read_upload(field: str, max_bytes: Optional[int] = None) -> Upload:
    """Read a file part from the current request.

    Args:
        field: Multipart field name
        max_bytes: Size ceiling in bytes, None for no limit

    Returns:
        The uploaded file

    Raises:
        ValidationError: If the field is missing or has no file selected
        UploadTooLarge: If the file is larger than max_bytes
    """
    file = request.files.get(field)
    if file is None or not file.filename:
        raise ValidationError(f"No {field} uploaded")

    # One byte past the limit is enough to know it is too large
    data = file.read() if max_bytes is None else file.read(max_bytes + 1)
    if max_bytes is not None and len(data) > max_bytes:
        raise UploadTooLarge(details=f"Maximum upload size is {max_bytes} bytes")

    return Upload(
        data=data,
        file_name=file.filename,
        mime_type=file.mimetype or Config.DEFAULT_MIME_TYPE,
    )
