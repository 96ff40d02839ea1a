"""JSON-on-disk store for the site's page sections and photo gallery.

Every mutation runs a full read-modify-write cycle under an exclusive lock:
the latest document is read from disk, changed in memory and written back
whole. There is no patch protocol.
"""

import logging
import shutil
from contextlib import contextmanager

from sitecms.defaults import default_content
from sitecms.errors import NotFound, StorageCorruption
from sitecms.utils.file_lock import atomic_write_json, locked_document, read_json
from sitecms.utils.helpers import timestamp_slug

logger = logging.getLogger(__name__)


def _position_key(photo):
    """Sort key for photos; anything that is not a number counts as 0."""
    position = photo.get("position") if isinstance(photo, dict) else None
    if isinstance(position, bool):
        return 0
    if isinstance(position, (int, float)):
        return position
    if isinstance(position, str):
        try:
            return float(position)
        except ValueError:
            return 0
    return 0


class ContentStore:
    def __init__(self, config, media=None):
        self.path = config.content_file
        # Binary storage for photos; needs a discard(storage_id) method.
        self.media = media

    # --- Persistence ---

    def _reset(self):
        content = default_content()
        atomic_write_json(self.path, content)
        return content

    def _backup_corrupt_file(self):
        backup = self.path.with_name(f"{self.path.name}.corrupt-{timestamp_slug()}")
        try:
            shutil.copyfile(self.path, backup)
        except OSError:
            logger.exception("Could not back up corrupt content file %s", self.path)
            return None
        return backup

    def _read_or_reset(self):
        """Read the document, bootstrapping or resetting it to defaults. Caller holds the lock."""
        try:
            content = read_json(self.path)
            if not isinstance(content, dict):
                raise StorageCorruption(f"{self.path} does not hold a JSON object")
            return content
        except FileNotFoundError:
            logger.info("No content file at %s, writing default content", self.path)
            return self._reset()
        except StorageCorruption as e:
            backup = self._backup_corrupt_file()
            logger.error(
                "STORAGE CORRUPTION: %s. Content reset to defaults; previous bytes saved to %s",
                e, backup,
            )
            return self._reset()

    @contextmanager
    def _mutate(self):
        """Yield the latest document and write it back whole on clean exit."""
        with locked_document(self.path):
            content = self._read_or_reset()
            yield content
            atomic_write_json(self.path, content)

    # --- Sections ---

    def load(self):
        with locked_document(self.path):
            return self._read_or_reset()

    def get_section(self, name):
        content = self.load()
        if name not in content:
            raise NotFound("Section not found")
        return content[name]

    def replace_section(self, name, value):
        with self._mutate() as content:
            if name not in content:
                raise NotFound("Section not found")
            content[name] = value
        logger.info("Replaced section %r", name)
        return value

    # --- Photos ---

    def list_photos(self):
        photos = self.load().get("photos")
        return photos if isinstance(photos, list) else []

    def add_photo(self, storage_id, url, label, position):
        photo = {
            "id": storage_id,
            "url": url,
            "label": label,
            "position": position,
        }
        with self._mutate() as content:
            if not isinstance(content.get("photos"), list):
                content["photos"] = []
            photos = content["photos"]
            photos.append(photo)
            # list.sort is stable, so equal positions keep insertion order
            photos.sort(key=_position_key)
        logger.info("Added photo %s at position %s", storage_id, position)
        return photo

    def remove_photo(self, photo_id):
        with self._mutate() as content:
            photos = content.get("photos")
            if not isinstance(photos, list):
                raise NotFound("Photo not found")
            index = next(
                (i for i, p in enumerate(photos) if isinstance(p, dict) and p.get("id") == photo_id),
                None,
            )
            if index is None:
                raise NotFound("Photo not found")
            removed = photos.pop(index)
        logger.info("Removed photo %s", photo_id)
        self._discard_binary(photo_id)
        return removed

    def _discard_binary(self, storage_id):
        if self.media is None:
            return
        try:
            self.media.discard(storage_id)
        except (OSError, ValueError) as e:
            logger.warning("Could not delete stored file for photo %s: %s", storage_id, e)
