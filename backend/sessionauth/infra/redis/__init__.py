from .redis_session_record_store import RedisSessionRecordStore

__all__ = ["RedisSessionRecordStore"]
