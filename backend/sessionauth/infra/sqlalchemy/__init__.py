from .account_store import SQLAlchemyAccountStore
from .session_record_store import SQLAlchemySessionRecordStore

__all__ = ["SQLAlchemyAccountStore", "SQLAlchemySessionRecordStore"]
