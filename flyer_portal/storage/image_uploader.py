"""
image_uploader.py - 이미지 업로드

이미지 바이너리를 받아 레코드에 그대로 저장할 문자열 참조를 돌려준다.
- 로컬: data URL (base64 인라인)
- Supabase: Storage 버킷 공개 URL
"""

import base64
import logging
import mimetypes
import random
import string
import time
from abc import ABC, abstractmethod
from pathlib import PurePosixPath

from supabase import Client

from flyer_portal.config import STORAGE_BUCKET
from flyer_portal.core.exceptions import ValidationError, SupabaseError, ErrorCodes

IMAGE_FOLDERS = ("managers", "products")


def _guess_mime(filename: str) -> str:
    mime, _ = mimetypes.guess_type(filename)
    return mime or "application/octet-stream"


def _check_folder(folder: str):
    if folder not in IMAGE_FOLDERS:
        raise ValidationError(
            f"이미지 폴더는 {IMAGE_FOLDERS} 중 하나여야 합니다.",
            field="folder",
            value=folder
        )


class ImageUploader(ABC):
    """이미지 업로더"""

    @abstractmethod
    def upload(self, data: bytes, filename: str, folder: str = "products") -> str:
        """업로드 후 참조 문자열(URL 또는 data URL) 반환"""

    def delete(self, reference: str) -> bool:
        """업로드한 이미지 삭제 (지원하지 않으면 False)"""
        return False


class DataUrlUploader(ImageUploader):
    """data URL 인코딩 (로컬 저장소용)"""

    def upload(self, data: bytes, filename: str, folder: str = "products") -> str:
        _check_folder(folder)
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{_guess_mime(filename)};base64,{encoded}"


class SupabaseImageUploader(ImageUploader):
    """Supabase Storage 업로드"""

    def __init__(self, client: Client, bucket: str = STORAGE_BUCKET, logger: logging.Logger = None):
        self.client = client
        self.bucket = bucket
        self.logger = logger or logging.getLogger(__name__)

    def _object_path(self, filename: str, folder: str) -> str:
        ext = PurePosixPath(filename).suffix.lstrip(".") or "bin"
        nonce = "".join(random.choice(string.ascii_lowercase + string.digits) for _ in range(6))
        return f"{folder}/{int(time.time() * 1000)}-{nonce}.{ext}"

    def upload(self, data: bytes, filename: str, folder: str = "products") -> str:
        _check_folder(folder)
        path = self._object_path(filename, folder)
        bucket = self.client.storage.from_(self.bucket)

        try:
            bucket.upload(
                path,
                data,
                {"content-type": _guess_mime(filename), "cache-control": "3600", "upsert": "false"}
            )
        except Exception as e:
            self.logger.error(f"[Supabase] 이미지 업로드 실패: {e}")
            raise SupabaseError(
                f"이미지 업로드 실패: {e}",
                table=self.bucket,
                operation="upload",
                error_code=ErrorCodes.UPLOAD_FAILED,
                cause=e
            ) from e

        return bucket.get_public_url(path)

    def delete(self, reference: str) -> bool:
        marker = f"{self.bucket}/"
        if marker not in reference:
            return False
        path = reference.split(marker, 1)[1].split("?", 1)[0]

        try:
            self.client.storage.from_(self.bucket).remove([path])
        except Exception as e:
            self.logger.warning(f"[Supabase] 이미지 삭제 실패: {path} - {e}")
            return False
        return True
