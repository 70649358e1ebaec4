from .session import Base, async_session, build_engine, create_tables, get_session_factory

__all__ = [
    "Base",
    "async_session",
    "build_engine",
    "create_tables",
    "get_session_factory",
]
