"""Media library used by image fields.

The media library is an external collaborator: it resolves an attachment id
to metadata (URL, dimensions, alt text, ...). Image fields use it to check
that a submitted id points at an image, and the API uses it to enrich
serialized pages with display data.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import yaml

logger = logging.getLogger(__name__)

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_size(num_bytes: int) -> str:
    """Format a byte count as a short human-readable string.

    Examples:
        512 -> "512 B"
        2048 -> "2 KB"
        1572864 -> "1.5 MB"
    """
    size = float(max(num_bytes, 0))
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    text = f"{size:.1f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"


@dataclass
class MediaAttachment:
    """Metadata for one stored attachment.

    Attributes:
        id: Positive attachment id.
        url: Public URL of the file.
        mime_type: MIME type, e.g. "image/png".
        width: Pixel width (0 if unknown or not an image).
        height: Pixel height (0 if unknown or not an image).
        alt: Alternative text.
        title: Attachment title.
        filename: Base file name.
        filesize: Size in bytes.
    """

    id: int
    url: str
    mime_type: str = "image/jpeg"
    width: int = 0
    height: int = 0
    alt: str = ""
    title: str = ""
    filename: str = ""
    filesize: int = 0

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def display_data(self) -> Dict[str, object]:
        """Return the image description sent to form clients."""
        return {
            "id": self.id,
            "url": self.url,
            "width": self.width,
            "height": self.height,
            "alt": self.alt,
            "title": self.title,
            "filename": self.filename or Path(self.url).name,
            "filesize": format_size(self.filesize),
        }


class MediaResolver(Protocol):
    """Anything that can resolve an attachment id."""

    def resolve(self, attachment_id: int) -> Optional[MediaAttachment]:
        ...


class MediaLibrary:
    """In-memory attachment catalogue.

    Example:
        media = MediaLibrary()
        media.add(MediaAttachment(id=7, url="/uploads/logo.png", mime_type="image/png"))
        media.resolve(7).is_image  # True
    """

    def __init__(self, attachments: Optional[List[MediaAttachment]] = None):
        self._attachments: Dict[int, MediaAttachment] = {}
        for attachment in attachments or []:
            self.add(attachment)

    def add(self, attachment: MediaAttachment) -> None:
        """Add or replace an attachment."""
        if attachment.id <= 0:
            raise ValueError(f"Attachment id must be positive, got {attachment.id}")
        self._attachments[attachment.id] = attachment

    def remove(self, attachment_id: int) -> None:
        self._attachments.pop(attachment_id, None)

    def resolve(self, attachment_id: int) -> Optional[MediaAttachment]:
        """Look up an attachment.

        Args:
            attachment_id: The attachment id.

        Returns:
            The attachment, or None if unknown.
        """
        return self._attachments.get(attachment_id)

    def is_image(self, attachment_id: int) -> bool:
        attachment = self.resolve(attachment_id)
        return attachment is not None and attachment.is_image

    def __len__(self) -> int:
        return len(self._attachments)

    @classmethod
    def from_yaml(cls, path: Path) -> "MediaLibrary":
        """Load a catalogue from a YAML list of attachment mappings.

        A missing file yields an empty library; malformed entries are
        skipped with a warning.
        """
        library = cls()
        if not path.exists():
            return library

        with open(path, encoding="utf-8") as f:
            entries = yaml.safe_load(f) or []

        for entry in entries:
            try:
                library.add(MediaAttachment(**entry))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping media entry {entry!r} from {path}: {e}")
        logger.debug(f"Loaded {len(library)} attachments from {path}")
        return library
