"""PostgreSQL store for encoded AML registrars."""

from __future__ import annotations

import time

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from aml_registrar.aml.codec import decode_registrar, encode_registrar
from aml_registrar.aml.registrar import AmlRegistrar
from aml_registrar.core.errors import NotFoundError
from aml_registrar.core.metrics import aml_registrar_store_latency_seconds

logger = structlog.get_logger(__name__)


class RegistrarRepository:
    """BYTEA persistence of registrars keyed by owner, with a version counter.

    The repository does not lock rows. Callers serialize access per owner.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, owner_id: str, registrar: AmlRegistrar) -> int:
        """Upsert the registrar. Returns the new version number."""
        start_time = time.perf_counter()
        try:
            query = text("""
                INSERT INTO aml.registrar_policy
                    (owner_id, payload, version, created_at, updated_at)
                VALUES
                    (:owner_id, :payload, 1, NOW(), NOW())
                ON CONFLICT (owner_id) DO UPDATE SET
                    payload = :payload,
                    version = registrar_policy.version + 1,
                    updated_at = NOW()
                RETURNING version
            """)
            result = await self._session.execute(
                query,
                {"owner_id": owner_id, "payload": encode_registrar(registrar)},
            )
            row = result.fetchone()
            version = row[0] if row else 0
            logger.info("AML registrar saved", owner_id=owner_id, version=version)
            return version
        finally:
            elapsed = time.perf_counter() - start_time
            aml_registrar_store_latency_seconds.labels(operation="save").observe(elapsed)

    async def load(self, owner_id: str) -> AmlRegistrar | None:
        """Load the registrar for owner, or None if nothing is stored."""
        start_time = time.perf_counter()
        try:
            query = text("""
                SELECT payload
                FROM aml.registrar_policy
                WHERE owner_id = :owner_id
            """)
            result = await self._session.execute(query, {"owner_id": owner_id})
            row = result.fetchone()
            if row is None:
                return None
            return decode_registrar(bytes(row[0]))
        finally:
            elapsed = time.perf_counter() - start_time
            aml_registrar_store_latency_seconds.labels(operation="load").observe(elapsed)

    async def get(self, owner_id: str) -> AmlRegistrar:
        """Load the registrar for owner. Raises NotFoundError if nothing is stored."""
        registrar = await self.load(owner_id)
        if registrar is None:
            raise NotFoundError(
                f"No AML registrar stored for {owner_id}",
                details={"owner_id": owner_id},
            )
        return registrar

    async def delete(self, owner_id: str) -> bool:
        """Delete the stored registrar. Returns False if nothing was stored."""
        start_time = time.perf_counter()
        try:
            query = text("""
                DELETE FROM aml.registrar_policy
                WHERE owner_id = :owner_id
                RETURNING owner_id
            """)
            result = await self._session.execute(query, {"owner_id": owner_id})
            deleted = result.fetchone() is not None
            if deleted:
                logger.info("AML registrar deleted", owner_id=owner_id)
            return deleted
        finally:
            elapsed = time.perf_counter() - start_time
            aml_registrar_store_latency_seconds.labels(operation="delete").observe(elapsed)

    async def get_version(self, owner_id: str) -> int:
        """Get current version. Returns 0 if nothing is stored."""
        start_time = time.perf_counter()
        try:
            query = text("""
                SELECT version
                FROM aml.registrar_policy
                WHERE owner_id = :owner_id
            """)
            result = await self._session.execute(query, {"owner_id": owner_id})
            row = result.fetchone()
            return row[0] if row else 0
        finally:
            elapsed = time.perf_counter() - start_time
            aml_registrar_store_latency_seconds.labels(operation="version").observe(elapsed)
