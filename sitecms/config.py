import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_ADMIN_KEY = "change-me"
CONTENT_FILENAME = "site-content.json"


@dataclass(frozen=True)
class Config:
    host: str
    port: int
    admin_key: str
    data_dir: Path
    uploads_dir: Path
    public_dir: Path
    max_upload_bytes: int = 10 * 1024 * 1024
    cors_origins: str = "*"
    log_level: str = "INFO"

    @property
    def content_file(self):
        return self.data_dir / CONTENT_FILENAME

    @property
    def uses_default_admin_key(self):
        return not self.admin_key or self.admin_key == DEFAULT_ADMIN_KEY

    def ensure_dirs(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.uploads_dir.mkdir(parents=True, exist_ok=True)


def _path_from_env(name, default):
    value = os.getenv(name, "")
    return Path(value) if value else default


def load_config(base_dir=None):
    """Build the process configuration from the environment (and `.env`)."""
    load_dotenv()
    base_dir = Path(base_dir) if base_dir else BASE_DIR

    return Config(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        admin_key=os.getenv("ADMIN_KEY", DEFAULT_ADMIN_KEY),
        data_dir=_path_from_env("DATA_DIR", base_dir / "data"),
        uploads_dir=_path_from_env("UPLOADS_DIR", base_dir / "uploads"),
        public_dir=_path_from_env("PUBLIC_DIR", base_dir / "public"),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
