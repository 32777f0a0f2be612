"""
Blob Store adapters for user-uploaded files (avatars, medical records).

Both implementations share one contract: files are addressed by
(bucket, path) and every stored file has a public URL.

    LocalBlobStore     - files under <upload_dir>/<bucket>/<path>, served at /files
    SupabaseBlobStore  - Supabase Storage buckets
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from supabase import Client

from core.exceptions import BlobStoreError

logger = logging.getLogger(__name__)


def path_from_public_url(url: str, folder: str) -> str:
    """
    Recover the blob path of a previously stored file from its public URL.

    Stored paths always look like "<folder>/<file name>", so the last URL
    segment is enough.
    """
    file_name = url.rstrip("/").split("/")[-1].split("?")[0]
    return f"{folder}/{file_name}"


class BlobStore(ABC):
    """Bucket/path addressed file storage with public URLs."""

    @abstractmethod
    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store bytes and return the file's public URL."""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of a stored file."""

    @abstractmethod
    def remove(self, bucket: str, path: str) -> bool:
        """Delete a file; return whether something was removed."""


class LocalBlobStore(BlobStore):
    """
    Filesystem blob store.

    The FastAPI app mounts `root_dir` as static files under /files, so
    `base_url` should point at that mount.
    """

    def __init__(self, root_dir: str, base_url: str):
        self.root_dir = Path(root_dir)
        self.base_url = base_url.rstrip("/")
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root_dir / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise BlobStoreError(operation="resolve", bucket=bucket, path=path)
        return target

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(bucket, path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(
                "Failed to write file",
                extra={"bucket": bucket, "path": path, "error": str(e)}
            )
            raise BlobStoreError(operation="upload", bucket=bucket) from e

        logger.info(
            "File stored",
            extra={"bucket": bucket, "path": path, "size": len(data), "content_type": content_type}
        )
        return self.public_url(bucket, path)

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/{bucket}/{path}"

    def remove(self, bucket: str, path: str) -> bool:
        target = self._resolve(bucket, path)
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.error(
                "Failed to delete file",
                extra={"bucket": bucket, "path": path, "error": str(e)}
            )
            raise BlobStoreError(operation="remove", bucket=bucket) from e
        return True


class SupabaseBlobStore(BlobStore):
    """Supabase Storage buckets via supabase-py."""

    def __init__(self, client: Client):
        self._client = client

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        try:
            self._client.storage.from_(bucket).upload(
                path, data, {"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(
                "Supabase storage upload failed",
                extra={"bucket": bucket, "path": path, "error": str(e)}
            )
            raise BlobStoreError(operation="upload", bucket=bucket) from e
        return self.public_url(bucket, path)

    def public_url(self, bucket: str, path: str) -> str:
        return self._client.storage.from_(bucket).get_public_url(path)

    def remove(self, bucket: str, path: str) -> bool:
        try:
            removed = self._client.storage.from_(bucket).remove([path])
        except Exception as e:
            logger.error(
                "Supabase storage remove failed",
                extra={"bucket": bucket, "path": path, "error": str(e)}
            )
            raise BlobStoreError(operation="remove", bucket=bucket) from e
        return bool(removed)
