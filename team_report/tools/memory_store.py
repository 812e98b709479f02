"""
Memory store access for the report agent.

Reads agent memories from PostgreSQL. Schema:
    memories (id uuid, entity_id uuid, agent_id uuid, room_id uuid,
              type text, content jsonb, created_at timestamptz)
- type: the logical table the memory belongs to ('messages', 'facts', ...)
- content: message payload; team member updates carry
  {"type": "team-member-update", "update": {...}}
"""

import json
import logging
from typing import Any, Dict, List, Optional

import asyncpg

from team_report.errors import StoreFailure
from team_report.models.update import StoredMemory

logger = logging.getLogger(__name__)

SQL_SELECT_MEMORIES = """
SELECT id, entity_id, agent_id, room_id, content, created_at
FROM memories
WHERE agent_id = $1
  AND type = $2
  AND ($3::uuid IS NULL OR room_id = $3::uuid)
ORDER BY created_at DESC
LIMIT $4;
"""


class MemoryStore:
    """
    Read access to stored agent memories.

    A failed fetch raises StoreFailure; it never yields an empty list.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        """
        Args:
            db_pool: AsyncPG connection pool for database access
        """
        self.pool = db_pool

    async def get_memories(
        self,
        agent_id: str,
        table_name: str = "messages",
        room_id: Optional[str] = None,
        count: Optional[int] = None
    ) -> List[StoredMemory]:
        """
        Get memories owned by an agent, newest first.

        Args:
            agent_id: Owning agent
            table_name: Logical memory table ('messages' for chat history)
            room_id: Optional - restrict to one room
            count: Optional - maximum number of memories

        Returns:
            List of StoredMemory rows

        Raises:
            StoreFailure: If the query fails
        """
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(SQL_SELECT_MEMORIES, agent_id, table_name, room_id, count)
        except Exception as e:
            logger.error(f"Failed to fetch '{table_name}' memories for agent {agent_id}: {e}")
            raise StoreFailure(f"Could not fetch memories for agent {agent_id}") from e

        memories = [self._row_to_memory(row) for row in rows]
        logger.info(f"Retrieved {len(memories)} '{table_name}' memories for agent {agent_id}")
        return memories

    @staticmethod
    def _row_to_memory(row) -> StoredMemory:
        return StoredMemory(
            id=_as_str(row["id"]),
            entity_id=_as_str(row["entity_id"]),
            agent_id=_as_str(row["agent_id"]),
            room_id=_as_str(row["room_id"]),
            content=_decode_content(row["id"], row["content"]),
            created_at=row["created_at"]
        )


def _as_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _decode_content(memory_id: Any, content: Any) -> Dict[str, Any]:
    # asyncpg hands jsonb back as text unless a type codec is registered
    if content is None:
        return {}
    if isinstance(content, dict):
        return content
    try:
        decoded = json.loads(content)
    except (TypeError, ValueError) as e:
        logger.warning(f"Memory {memory_id} has unreadable content: {e}")
        return {}
    return decoded if isinstance(decoded, dict) else {}
