from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from sqlmodel import Field, Session, SQLModel, col, create_engine, select

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stringify_date(value: datetime) -> str:
    """Format a timestamp the way wiki records store it (YYYYMMDDhhmmssSSS, UTC)."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%d%H%M%S") + f"{value.microsecond // 1000:03d}"


class Record(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True, unique=True)
    fields_json: str = Field(default="{}")
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    @property
    def fields(self) -> Dict[str, Any]:
        return json.loads(self.fields_json or "{}")


class ShadowRecord(SQLModel, table=True):
    """Default record shipped by a plugin; read-only for normal writes."""

    id: Optional[int] = Field(default=None, primary_key=True)
    root: str = Field(index=True)
    title: str = Field(index=True)
    fields_json: str = Field(default="{}")

    @property
    def fields(self) -> Dict[str, Any]:
        return json.loads(self.fields_json or "{}")


def _encode_fields(fields: Mapping[str, Any]) -> str:
    return json.dumps(dict(fields), sort_keys=True, default=str)


class RecordStore:
    """SQLModel-backed title/fields record store with plugin shadow defaults."""

    def __init__(
        self,
        db_url: Optional[str] = None,
        db_path: Optional[Path] = None,
        db_dir: Optional[Path] = None,
        author: Optional[str] = None,
    ):
        self.author = author
        self.db_path = self._resolve_db_path(db_url=db_url, db_path=db_path, db_dir=db_dir)
        engine_url = db_url
        if not engine_url:
            if not self.db_path:
                raise ValueError("Unable to resolve record database path.")
            engine_url = f"sqlite:///{self.db_path.as_posix()}"
        self._engine_url = engine_url
        self._connect_args = {"check_same_thread": False}
        self.engine = create_engine(self._engine_url, connect_args=self._connect_args)
        SQLModel.metadata.create_all(self.engine)
        self._lock = threading.Lock()

    def _resolve_db_path(self, *, db_url: Optional[str], db_path: Optional[Path], db_dir: Optional[Path]) -> Optional[Path]:
        if db_path:
            resolved = Path(db_path).expanduser()
        elif db_url:
            if not db_url.startswith("sqlite:///"):
                return None
            raw = db_url.replace("sqlite:///", "")
            if not raw or raw == ":memory:":
                return None
            resolved = Path(raw).expanduser()
        else:
            explicit_path = os.getenv("RECORD_DB_PATH")
            if explicit_path:
                resolved = Path(explicit_path).expanduser()
            else:
                base_dir = Path(db_dir or os.getenv("RECORD_DB_DIR") or "records_db").expanduser()
                resolved = base_dir / "records.db"
        resolved.parent.mkdir(parents=True, exist_ok=True)
        return resolved

    def reinitialize(self) -> None:
        """Recreate the engine, e.g. after the database file was replaced on disk."""
        with self._lock:
            try:
                self.engine.dispose()
            except Exception as exc:
                logger.warning("Failed to dispose record store engine: %s", exc)
            self.engine = create_engine(self._engine_url, connect_args=self._connect_args)
            SQLModel.metadata.create_all(self.engine)

    def _with_session(self):
        return Session(self.engine)

    def record_exists(self, title: str) -> bool:
        return self.get_record(title) is not None

    def get_record(self, title: str) -> Optional[Record]:
        with self._with_session() as session:
            return session.exec(select(Record).where(Record.title == title)).first()

    def list_records(self, prefix: str) -> List[Record]:
        with self._with_session() as session:
            statement = (
                select(Record)
                .where(col(Record.title).startswith(prefix, autoescape=True))
                .order_by(Record.title)
            )
            return list(session.exec(statement).all())

    def put_record(self, fields: Mapping[str, Any]) -> Record:
        """Create or fully replace the record named by `fields["title"]`."""
        title = fields.get("title")
        if not title:
            raise ValueError("Record fields must include a title")
        with self._lock:
            with self._with_session() as session:
                record = session.exec(select(Record).where(Record.title == title)).first()
                if record is None:
                    record = Record(title=title)
                record.fields_json = _encode_fields(fields)
                record.updated_at = _utcnow()
                session.add(record)
                session.commit()
                session.refresh(record)
                return record

    def delete_record(self, title: str) -> None:
        with self._lock:
            with self._with_session() as session:
                record = session.exec(select(Record).where(Record.title == title)).first()
                if not record:
                    return
                session.delete(record)
                session.commit()

    def get_shadow_record(self, root: str, title: str) -> Optional[ShadowRecord]:
        with self._with_session() as session:
            statement = select(ShadowRecord).where(ShadowRecord.root == root, ShadowRecord.title == title)
            return session.exec(statement).first()

    def put_shadow_record(self, root: str, fields: Mapping[str, Any]) -> ShadowRecord:
        title = fields.get("title")
        if not title:
            raise ValueError("Shadow record fields must include a title")
        with self._lock:
            with self._with_session() as session:
                statement = select(ShadowRecord).where(ShadowRecord.root == root, ShadowRecord.title == title)
                shadow = session.exec(statement).first()
                if shadow is None:
                    shadow = ShadowRecord(root=root, title=title)
                shadow.fields_json = _encode_fields(fields)
                session.add(shadow)
                session.commit()
                session.refresh(shadow)
                return shadow

    def get_creation_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"created": stringify_date(_utcnow())}
        if self.author:
            fields["creator"] = self.author
        return fields

    def get_modification_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"modified": stringify_date(_utcnow())}
        if self.author:
            fields["modifier"] = self.author
        return fields
