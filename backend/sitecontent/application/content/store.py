# sitecontent/application/content/store.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from sitecontent.domain.content import ContentSnapshot
from sitecontent.domain.invariants.exceptions import InvalidContentFormat
from sitecontent.extensions import db
from sitecontent.models.base import utc_now
from sitecontent.models.site_content import SiteContent
from sitecontent.normalizers.content import normalize_content, parse_content
from sitecontent.utils.transaction import transactional

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    """What the reconciler needs from persistence."""

    async def save(self, snapshot: ContentSnapshot) -> bool:
        ...

    async def load(self) -> Optional[ContentSnapshot]:
        ...


class SQLAlchemyContentStore:
    """
    Keeps the site content as a single ``site_content`` row.

    Responsibilities:
    - Full overwrite on save: delete the record, then insert it again
    - Stamp created_at / updated_at on every write
    - Report failures as return values, never as exceptions

    The delete and the insert are committed separately, so a crash in
    between leaves the table without a record.
    """

    def __init__(self, app: Flask, record_id: str = "main") -> None:
        self.app = app
        self.record_id = record_id

    @property
    def configured(self) -> bool:
        return bool(self.app.config.get("SQLALCHEMY_DATABASE_URI"))

    async def save(self, snapshot: ContentSnapshot) -> bool:
        if not self.configured:
            logger.error("Content store not configured - missing database URI")
            return False

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._save_sync, snapshot)

    async def load(self) -> Optional[ContentSnapshot]:
        if not self.configured:
            logger.error("Content store not configured - missing database URI")
            return None

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._load_sync)

    def _save_sync(self, snapshot: ContentSnapshot) -> bool:
        with self.app.app_context():
            try:
                self._delete_record()

                now = utc_now()
                record = SiteContent()
                record.id = self.record_id
                record.content = normalize_content(snapshot)
                record.created_at = now
                record.updated_at = now

                with transactional("content insert") as session:
                    session.add(record)
            except SQLAlchemyError:
                logger.exception("Failed to write content record '%s'", self.record_id)
                return False

        logger.info(
            "Content record '%s' overwritten (%s blocks)",
            self.record_id,
            len(snapshot.blocks),
        )
        return True

    def _delete_record(self) -> None:
        try:
            with transactional("content delete"):
                SiteContent.query.filter_by(id=self.record_id).delete()
        except SQLAlchemyError as exc:
            # The record may simply not exist yet; the insert decides
            logger.warning("Could not delete content record '%s': %s", self.record_id, exc)

    def _load_sync(self) -> Optional[ContentSnapshot]:
        with self.app.app_context():
            try:
                record = db.session.get(SiteContent, self.record_id)
            except SQLAlchemyError:
                logger.exception("Failed to read content record '%s'", self.record_id)
                return None

            if record is None or not record.content:
                logger.info("No content record '%s' in store", self.record_id)
                return None

            try:
                return parse_content(record.content)
            except InvalidContentFormat as exc:
                logger.error("Stored content record '%s' is malformed: %s", self.record_id, exc)
                return None
