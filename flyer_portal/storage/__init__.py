"""저장소 모듈 (로컬 JSON / Supabase)"""
from .record_store import RecordStore, Tables
from .local_store import LocalStore, KeyValueStorage, MemoryStorage, JsonFileStorage, SLOT_KEYS
from .supabase_store import SupabaseStore
from .image_uploader import ImageUploader, DataUrlUploader, SupabaseImageUploader

__all__ = [
    "RecordStore",
    "Tables",
    "LocalStore",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "SLOT_KEYS",
    "SupabaseStore",
    "ImageUploader",
    "DataUrlUploader",
    "SupabaseImageUploader",
]
