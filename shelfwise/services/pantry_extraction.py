"""Pantry extraction service - recognizes pantry items in a photo."""

import base64
import binascii
import logging
import typing as t
from io import BytesIO

from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from shelfwise.core.config import SETTINGS
from shelfwise.core.globals import HEIF_MIME_TYPES
from shelfwise.schemas.pantry import DetectedItem, ExtractionResult
from shelfwise.services.gemini import GeminiClient

LOGGER = logging.getLogger(__name__)

EXTRACTION_PROMPT: str = "\n".join(
    [
        "You are extracting pantry item data from one food image.",
        "Return STRICT JSON only with this shape:",
        '{ "items": [{ "name": string, "category": string,'
        ' "expiryDateISO": "YYYY-MM-DD", "quantityValue": number|null,'
        ' "quantityUnit": "pcs|g|kg|ml|l|pack|bottle|can|box|other|null",'
        ' "quantityNote": string|null, "confidence": number }],'
        ' "warnings": string[] }',
        "Rules:",
        "- Use date format YYYY-MM-DD.",
        "- If unsure, add warning.",
        "- Do not include markdown.",
    ]
)


class InvalidImageError(Exception):
    """Raised when image data is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ImageTooLargeError(Exception):
    """Raised when image exceeds size limit."""

    max_size_mb: float

    def __init__(self, max_size_mb: float) -> None:
        """Initialize ImageTooLargeError.

        Args:
            max_size_mb (float): The maximum allowed image size in megabytes.
        """
        self.max_size_mb = max_size_mb
        super().__init__(f"Image size exceeds maximum of {max_size_mb}MB")


def prepare_image(
    image_base64: str, mime_type: str | None = None
) -> tuple[str, str]:
    """Validate an uploaded photo before sending it to the model.

    Args:
        image_base64 (str):
            Base64 image, optionally as a data URL
            (e.g. ``data:image/png;base64,...``).
        mime_type (str | None):
            Declared MIME type, detected from the image when None.

    Returns:
        tuple[str, str]: The bare base64 payload and its MIME type.
    """
    if "," in image_base64:
        header, image_base64 = image_base64.split(",", 1)
        if mime_type is None and ":" in header:
            mime_type = header.split(":")[1].split(";")[0] or None

    try:
        image_data: bytes = base64.b64decode(image_base64, validate=True)
    except binascii.Error as exc:
        raise InvalidImageError("Invalid base64 image data") from exc

    max_size: int = SETTINGS.max_image_size_mb * 1024 * 1024
    if len(image_data) > max_size:
        raise ImageTooLargeError(SETTINGS.max_image_size_mb)

    # Pillow has no HEIF decoder, the model accepts these as they are.
    if mime_type is not None and mime_type.lower() in HEIF_MIME_TYPES:
        return image_base64, mime_type

    try:
        with Image.open(BytesIO(image_data)) as img:
            img.verify()
            detected: str | None = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise InvalidImageError("Uploaded data is not a readable image") from exc

    return image_base64, mime_type or detected or "image/jpeg"


def sanitize_detected_item(raw: t.Any) -> DetectedItem | None:
    """Validate one item proposed by the model.

    Args:
        raw (t.Any): Untrusted item from the model output.

    Returns:
        DetectedItem | None: The item, or None if it lacks a usable name
        or expiry date.
    """
    if not isinstance(raw, dict):
        return None
    try:
        return DetectedItem.model_validate(raw)
    except ValidationError as exc:
        LOGGER.debug("Dropping detected item: %s", exc.errors())
        return None


def build_extraction_result(data: t.Any) -> ExtractionResult:
    """Turn the model's answer into a validated extraction result.

    Args:
        data (t.Any): Decoded model output.

    Returns:
        ExtractionResult: Valid items and stringified warnings.
    """
    if not isinstance(data, dict):
        data = {}
    raw_items: t.Any = data.get("items")
    raw_warnings: t.Any = data.get("warnings")

    items: t.List[DetectedItem] = []
    for raw in raw_items if isinstance(raw_items, list) else []:
        item: DetectedItem | None = sanitize_detected_item(raw)
        if item is not None:
            items.append(item)

    warnings: t.List[str] = (
        [str(w) for w in raw_warnings] if isinstance(raw_warnings, list) else []
    )
    return ExtractionResult(items=items, warnings=warnings)


async def extract_pantry_items(
    client: GeminiClient,
    image_base64: str,
    mime_type: str | None = None,
) -> ExtractionResult:
    """Recognize pantry items in a photo.

    Args:
        client (GeminiClient): The Gemini client.
        image_base64 (str): The photo, base64 encoded.
        mime_type (str | None): The photo's MIME type.

    Returns:
        ExtractionResult: Recognized items and warnings.
    """
    payload, effective_mime = prepare_image(image_base64, mime_type)
    data: t.Any = await client.generate_json(
        EXTRACTION_PROMPT, image_base64=payload, mime_type=effective_mime
    )
    result: ExtractionResult = build_extraction_result(data)
    LOGGER.info(
        "Extracted %d pantry item(s) with %d warning(s)",
        len(result.items),
        len(result.warnings),
    )
    return result
