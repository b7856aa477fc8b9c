"""
Database Package

Database models, connection management, and data persistence layer.
"""
from src.estatehub.db.base import Base
from src.estatehub.db.session import (
    engine,
    SessionLocal,
    get_db_session,
    health_check,
    close_connections,
    create_all_tables,
    drop_all_tables,
)
from src.estatehub.db.models import (
    Property,
    Lead,
    LeadStatus,
    Admin,
    AdminRole,
)

__all__ = [
    # Base
    "Base",
    # Session management
    "engine",
    "SessionLocal",
    "get_db_session",
    "health_check",
    "close_connections",
    "create_all_tables",
    "drop_all_tables",
    # Models
    "Property",
    "Lead",
    "LeadStatus",
    "Admin",
    "AdminRole",
]
