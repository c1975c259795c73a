"""Image field."""

from typing import Any, Dict, Optional

from ..media import MediaResolver
from .base import ErrorKind, Field, FieldType, ValidationResult, is_empty
from .sanitize import absint


class ImageField(Field):
    """Attachment picker storing the id of an image in the media library.

    Validation checks that a non-empty id resolves to an image through the
    media library attached with ``use_media``. Without a library no id can
    be confirmed, so every non-empty value is rejected.
    """

    type_name = FieldType.IMAGE.value
    defaults = {
        "label": "",
        "description": "",
        "default": 0,
        "button_text": "Select Image",
        "remove_text": "Remove Image",
        "multiple": False,
        "file_type": "image",
        "required": False,
    }

    def coerce(self, value: Any) -> int:
        return absint(value)

    def validate(self, value: Any) -> ValidationResult:
        if is_empty(value):
            if self.required:
                return self.required_error()
            return ValidationResult.ok(self.id)

        attachment_id = absint(value)
        if attachment_id == 0 or not self._is_image(attachment_id):
            return ValidationResult.fail(
                self.id,
                ErrorKind.INVALID_IMAGE,
                f'Invalid image for field "{self.label}".',
            )
        return ValidationResult.ok(self.id)

    def sanitize(self, value: Any) -> int:
        return absint(value)

    def resolve_display_data(self, media: Optional[MediaResolver]) -> Dict[str, Any]:
        """Describe the selected image.

        Args:
            media: Media library to resolve the current value against.

        Returns:
            ``{"image_data": {...}}`` when the current value is a known
            image, otherwise an empty dict.
        """
        if not self._value or media is None:
            return {}
        attachment = media.resolve(self._value)
        if attachment is None or not attachment.is_image:
            return {}
        return {"image_data": attachment.display_data()}

    def _is_image(self, attachment_id: int) -> bool:
        if self._media is None:
            return False
        attachment = self._media.resolve(attachment_id)
        return attachment is not None and attachment.is_image
