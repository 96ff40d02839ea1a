import logging
import os
import re
import tempfile
from pathlib import Path

from werkzeug.utils import secure_filename

from sitecms.errors import PayloadTooLarge
from sitecms.utils.helpers import generate_token, now_millis

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
UPLOADS_URL_PREFIX = "/uploads"
# Not reachable through /uploads/<filename>, which takes no slashes.
INCOMING_DIRNAME = ".incoming"

_unsafe_chars = re.compile(r"[^A-Za-z0-9_-]")
_extension_re = re.compile(r"^\.[A-Za-z0-9]+$")


class UploadReceiver:
    """Writes uploaded binaries into the public uploads directory."""

    def __init__(self, config):
        self.uploads_dir = Path(config.uploads_dir)
        self.incoming_dir = self.uploads_dir / INCOMING_DIRNAME
        self.max_bytes = config.max_upload_bytes

    def storage_name(self, original_name):
        """Build `<base>_<millis>_<token><ext>` from the client's filename."""
        raw = os.path.basename((original_name or "").replace("\\", "/"))
        base, ext = os.path.splitext(raw)
        if not _extension_re.match(ext):
            ext = ""
        base = _unsafe_chars.sub("_", secure_filename(base)) or "upload"
        return f"{base}_{now_millis()}_{generate_token()}{ext}"

    def url_for(self, storage_id):
        return f"{UPLOADS_URL_PREFIX}/{storage_id}"

    def path_for(self, storage_id):
        """Resolve a storage id to its file, refusing ids outside the uploads dir."""
        root = self.uploads_dir.resolve()
        path = (root / storage_id).resolve()
        if not storage_id or path.parent != root:
            raise ValueError(f"Invalid storage id: {storage_id!r}")
        return path

    def receive(self, stream, original_name):
        """Stream an upload to disk and return its storage id and public URL.

        Bytes go to a temp file in a non-served subdirectory and are renamed
        into place only after the whole stream fit under the size cap.
        """
        storage_id = self.storage_name(original_name)
        target = self.path_for(storage_id)
        self.incoming_dir.mkdir(parents=True, exist_ok=True)
        fd, partial = tempfile.mkstemp(prefix=f"{storage_id}.", suffix=".part", dir=self.incoming_dir)

        written = 0
        try:
            with os.fdopen(fd, "wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise PayloadTooLarge(f"File too large (max {self.max_bytes} bytes)")
                    out.write(chunk)
                out.flush()
                os.fsync(out.fileno())
            os.replace(partial, target)
        except BaseException:
            Path(partial).unlink(missing_ok=True)
            raise

        logger.info("Stored upload %r as %s (%d bytes)", original_name, storage_id, written)
        return {"storage_id": storage_id, "url": self.url_for(storage_id)}

    def discard(self, storage_id):
        """Delete a stored binary. A missing file is not an error."""
        self.path_for(storage_id).unlink(missing_ok=True)
