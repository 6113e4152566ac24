import base64
import binascii

from cardvault.processor.exceptions import IngestError

PDF_CONTENT_TYPE = "application/pdf"


def normalize_content_type(content_type: str | None) -> str:
    """Lowercase and drop parameters: 'Image/JPEG; q=1' -> 'image/jpeg'."""
    if not content_type:
        raise IngestError("No MIME type provided")
    return content_type.split(";", 1)[0].strip().lower()


def decode_payload(image_data: bytes | str | None) -> bytes:
    """Return raw bytes from bytes, a base64 string, or a base64 data URL.

    Raises:
        IngestError: if the payload is missing, empty or not valid base64.
    """
    if image_data is None or len(image_data) == 0:
        raise IngestError("No image data provided")
    if isinstance(image_data, (bytes, bytearray)):
        return bytes(image_data)
    encoded = image_data.strip()
    if encoded.startswith("data:"):
        _, sep, encoded = encoded.partition(",")
        if not sep:
            raise IngestError("Malformed data URL")
    # MIME and base64(1) output wrap lines at 76 characters
    encoded = "".join(encoded.split())
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise IngestError(f"Image data is not valid base64: {exc}") from exc
    if not raw:
        raise IngestError("No image data provided")
    return raw


def check_size(raw: bytes, max_bytes: int) -> None:
    if len(raw) > max_bytes:
        raise IngestError(
            f"Image too large ({len(raw)} bytes). Maximum size is {max_bytes // (1024 * 1024)}MB."
        )
