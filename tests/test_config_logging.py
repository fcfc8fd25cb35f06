"""config.py / core/logging.py / image_uploader.py 테스트"""

import logging

import pytest
from rich.logging import RichHandler

from conftest import FakeSupabaseClient
from flyer_portal.config import AppSettings
from flyer_portal.core.exceptions import ErrorCodes, SupabaseError
from flyer_portal.core.logging import PerformanceLogger, configure_logging, setup_logger
from flyer_portal.repositories.unified import Repositories
from flyer_portal.storage.image_uploader import DataUrlUploader, SupabaseImageUploader
from flyer_portal.storage.local_store import LocalStore, MemoryStorage


class TestAppSettings:
    """설정 테스트"""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "key")
        monkeypatch.setenv("FLYER_DATA_DIR", "/tmp/flyer")
        monkeypatch.setenv("PUBLIC_BASE_URL", "https://flyer.example.com/")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = AppSettings.from_env()
        assert settings.is_supabase_configured()
        assert settings.data_dir == "/tmp/flyer"
        assert settings.public_base_url == "https://flyer.example.com"
        assert settings.log_level == "DEBUG"

    def test_needs_both_values(self):
        assert not AppSettings(supabase_url="https://x.supabase.co").is_supabase_configured()
        assert not AppSettings(supabase_key="key").is_supabase_configured()
        assert not AppSettings().is_supabase_configured()

    def test_urls(self):
        settings = AppSettings(public_base_url="https://flyer.example.com")
        assert settings.edit_url("TOKEN") == "https://flyer.example.com/edit/TOKEN"
        assert settings.public_url("myshop") == "https://flyer.example.com/s/myshop"
        assert AppSettings().public_url("myshop") == "/s/myshop"

    def test_validate(self):
        assert AppSettings().validate() == []
        assert len(AppSettings(supabase_url="https://x.supabase.co").validate()) == 1
        errors = AppSettings(supabase_url="x.supabase.co", supabase_key="k", log_level="LOUD").validate()
        assert len(errors) == 2


class TestLogging:
    """로깅 테스트"""

    def test_setup_logger_rich_handler(self):
        logger = setup_logger("flyer_portal.test_setup", logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

        # 두 번 호출해도 핸들러 중복 없음
        setup_logger("flyer_portal.test_setup")
        assert len(logger.handlers) == 1

    def test_configure_logging_levels(self):
        logger = configure_logging(AppSettings(log_level="warning"))
        assert logger.name == "flyer_portal"
        assert logger.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

        assert configure_logging(AppSettings(log_level="LOUD")).level == logging.INFO
        assert configure_logging(AppSettings(debug_mode=True, log_level="ERROR")).level == logging.DEBUG
        configure_logging(AppSettings())

    def test_repositories_configure_package_logger(self):
        """저장소 생성 시 설정의 LOG_LEVEL로 패키지 로거 구성"""
        Repositories(settings=AppSettings(log_level="ERROR"), local_store=LocalStore(MemoryStorage()))
        package_logger = logging.getLogger("flyer_portal")
        assert package_logger.level == logging.ERROR
        assert any(isinstance(h, RichHandler) for h in package_logger.handlers)
        configure_logging(AppSettings())

    def test_track_success(self, caplog):
        perf = PerformanceLogger(logging.getLogger("flyer_portal.test_perf"))
        with caplog.at_level(logging.DEBUG, logger="flyer_portal.test_perf"):
            with perf.track("신청 승인", request_id="r1"):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "시작: 신청 승인"
        assert messages[-1].startswith("완료: 신청 승인")

    def test_track_failure_reraises(self, caplog):
        perf = PerformanceLogger(logging.getLogger("flyer_portal.test_perf"))
        with caplog.at_level(logging.DEBUG, logger="flyer_portal.test_perf"):
            with pytest.raises(ValueError):
                with perf.track("매장 저장"):
                    raise ValueError("boom")

        assert caplog.records[-1].levelno == logging.ERROR
        assert "boom" in caplog.records[-1].getMessage()

    def test_timed_decorator(self):
        perf = PerformanceLogger(logging.getLogger("flyer_portal.test_perf"))

        @perf.timed()
        def add(a, b):
            return a + b

        assert add(1, 2) == 3
        assert add.__name__ == "add"


class TestImageUploader:
    """이미지 업로더 테스트"""

    def test_data_url(self):
        url = DataUrlUploader().upload(b"abc", "a.jpg")
        assert url == "data:image/jpeg;base64,YWJj"
        assert DataUrlUploader().delete(url) is False

    def test_supabase_upload(self):
        client = FakeSupabaseClient()
        uploader = SupabaseImageUploader(client)

        url = uploader.upload(b"abc", "photo.png", folder="managers")

        assert url.startswith("https://fake.supabase.co/storage/v1/object/public/images/managers/")
        assert url.endswith(".png")
        (key, (data, options)), = client.storage.objects.items()
        assert data == b"abc"
        assert options["content-type"] == "image/png"
        assert options["upsert"] == "false"

        assert uploader.delete(url) is True
        assert client.storage.objects == {}

    def test_supabase_upload_failure(self):
        client = FakeSupabaseClient()
        client.storage.fail_upload = True

        with pytest.raises(SupabaseError) as exc_info:
            SupabaseImageUploader(client).upload(b"abc", "photo.png")
        assert exc_info.value.error_code == ErrorCodes.UPLOAD_FAILED
