"""
config.py - 프로젝트 설정 (v1.0)

환경변수 기반 설정 관리 (.env 지원)

    SUPABASE_URL=https://xxx.supabase.co
    SUPABASE_KEY=eyJxxx...
    FLYER_DATA_DIR=data/flyer
    PUBLIC_BASE_URL=https://flyer.example.com
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent.parent
DATA_DIR = ROOT_DIR / "data" / "flyer"

# 이미지 업로드 버킷
STORAGE_BUCKET = "images"


@dataclass
class AppSettings:
    """애플리케이션 설정"""

    # --- 원격 백엔드 (둘 다 있어야 활성화) ---
    supabase_url: str = ""
    supabase_key: str = ""

    # --- 로컬 저장소 ---
    data_dir: str = str(DATA_DIR)

    # --- URL ---
    public_base_url: str = ""       # 편집/공개 링크 앞에 붙는 주소 (없으면 상대경로)

    # --- 기타 ---
    debug_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        """환경변수에서 설정 로드"""
        return cls(
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            data_dir=os.getenv("FLYER_DATA_DIR", str(DATA_DIR)),
            public_base_url=os.getenv("PUBLIC_BASE_URL", "").rstrip("/"),
            debug_mode=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def is_supabase_configured(self) -> bool:
        """Supabase 설정 여부 (URL, Key 둘 다 필요)"""
        return bool(self.supabase_url and self.supabase_key)

    def edit_url(self, edit_token: str) -> str:
        """매장 편집 링크"""
        return f"{self.public_base_url}/edit/{edit_token}"

    def public_url(self, slug: str) -> str:
        """공개 전단 링크"""
        return f"{self.public_base_url}/s/{slug}"

    def validate(self) -> List[str]:
        """설정 유효성 검사"""
        errors = []

        if bool(self.supabase_url) != bool(self.supabase_key):
            errors.append("SUPABASE_URL과 SUPABASE_KEY는 함께 설정해야 합니다. (로컬 저장소로 동작)")

        if self.supabase_url and not self.supabase_url.startswith("http"):
            errors.append("SUPABASE_URL은 http(s)로 시작해야 합니다.")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"알 수 없는 LOG_LEVEL입니다: {self.log_level}")

        return errors


# 전역 설정 인스턴스
settings = AppSettings.from_env()


def get_settings() -> AppSettings:
    """설정 인스턴스 반환"""
    return settings


def reload_settings() -> AppSettings:
    """설정 다시 로드"""
    global settings
    settings = AppSettings.from_env()
    return settings
