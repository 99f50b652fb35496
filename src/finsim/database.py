"""
Database configuration and models for saved simulation snapshots.
"""

import json
from typing import List, Optional

from sqlalchemy import create_engine, Column, Integer, String, Text
from sqlalchemy.orm import declarative_base, Session

from .config import DATA_DIR, DATABASE_URL
from .models import SnapshotIn, SnapshotOut

if DATABASE_URL.startswith("sqlite:///") and str(DATA_DIR) in DATABASE_URL:
    DATA_DIR.mkdir(exist_ok=True)

# SQLite engine configuration
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)

# Base class for SQLAlchemy models
Base = declarative_base()


class SnapshotRow(Base):
    """Database model for a saved simulation"""
    __tablename__ = "snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), unique=True, nullable=False)
    kind = Column(String(32), nullable=False, default="simulation")
    payload = Column(Text, nullable=False)  # JSON string of request and result


# Create tables if they don't exist
Base.metadata.create_all(engine)


def get_session() -> Session:
    """Get a new database session"""
    return Session(engine)


def _to_out(row: SnapshotRow) -> SnapshotOut:
    return SnapshotOut(id=row.id, name=row.name, kind=row.kind, payload=json.loads(row.payload))


def list_snapshots() -> List[SnapshotOut]:
    with get_session() as s:
        return [_to_out(r) for r in s.query(SnapshotRow).order_by(SnapshotRow.id).all()]


def get_snapshot(sid: int) -> Optional[SnapshotOut]:
    with get_session() as s:
        row = s.get(SnapshotRow, sid)
        return _to_out(row) if row else None


def save_snapshot(snapshot: SnapshotIn) -> SnapshotOut:
    """Insert, or replace the snapshot with the same name."""
    payload = json.dumps(snapshot.payload)
    with get_session() as s:
        row = s.query(SnapshotRow).filter_by(name=snapshot.name).first()
        if row is None:
            row = SnapshotRow(name=snapshot.name, kind=snapshot.kind, payload=payload)
            s.add(row)
        else:
            row.kind = snapshot.kind
            row.payload = payload
        s.commit()
        return _to_out(row)


def delete_snapshot(sid: int) -> bool:
    with get_session() as s:
        row = s.get(SnapshotRow, sid)
        if row is None:
            return False
        s.delete(row)
        s.commit()
        return True
