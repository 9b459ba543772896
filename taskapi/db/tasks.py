# db/tasks.py
import logging
from itertools import combinations
from typing import Any, Dict, List, Optional

from taskapi.schemas import Task

logger = logging.getLogger(__name__)

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id  SERIAL PRIMARY KEY,
    name     TEXT NOT NULL,
    priority INTEGER
)
"""

SELECT_TASKS = "SELECT task_id, name, priority FROM tasks ORDER BY task_id"
SELECT_TASK = "SELECT task_id, name, priority FROM tasks WHERE task_id = $1"
INSERT_TASK = "INSERT INTO tasks (name, priority) VALUES ($1, $2) RETURNING task_id"
DELETE_TASK = "DELETE FROM tasks WHERE task_id = $1"

# Columns a PATCH may touch, in the order their parameters are bound
UPDATABLE_COLUMNS = ("name", "priority")


def _build_update(columns):
    assignments = ", ".join(f"{column} = ${i}" for i, column in enumerate(columns, start=2))
    return f"UPDATE tasks SET {assignments} WHERE task_id = $1"


# One statement per non-empty combination of columns; SQL text never contains user input
UPDATE_STATEMENTS = {
    frozenset(combo): _build_update(combo)
    for size in range(1, len(UPDATABLE_COLUMNS) + 1)
    for combo in combinations(UPDATABLE_COLUMNS, size)
}


def rows_affected(status: str) -> int:
    """Parse the row count from an asyncpg command tag such as ``UPDATE 1``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class TaskRepository:
    def __init__(self, db):
        self.db = db

    async def init_schema(self):
        await self.db.execute(CREATE_TASKS_TABLE)
        logger.info("Table 'tasks' is ready")

    async def list_tasks(self) -> List[Task]:
        rows = await self.db.fetch(SELECT_TASKS)
        return [Task(**dict(row)) for row in rows]

    async def get_task(self, task_id: int) -> Optional[Task]:
        row = await self.db.fetchrow(SELECT_TASK, task_id)
        return Task(**dict(row)) if row else None

    async def create_task(self, name: str, priority: Optional[int] = None) -> int:
        task_id = await self.db.fetchval(INSERT_TASK, name, priority)
        logger.info(f"Created task {task_id}")
        return task_id

    async def update_task(self, task_id: int, changes: Dict[str, Any]) -> int:
        """
        Apply a partial update and return the number of rows changed.

        A column missing from ``changes`` keeps its value; a column mapped to
        ``None`` is set to NULL.
        """
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Columns cannot be updated: {', '.join(sorted(unknown))}")

        columns = [column for column in UPDATABLE_COLUMNS if column in changes]
        if not columns:
            return 0

        query = UPDATE_STATEMENTS[frozenset(columns)]
        status = await self.db.execute(query, task_id, *(changes[column] for column in columns))
        count = rows_affected(status)
        if count:
            logger.info(f"Updated task {task_id}: {', '.join(columns)}")
        else:
            logger.info(f"Update matched no task with id {task_id}")
        return count

    async def delete_task(self, task_id: int) -> int:
        count = rows_affected(await self.db.execute(DELETE_TASK, task_id))
        if count:
            logger.info(f"Deleted task {task_id}")
        else:
            logger.info(f"Delete matched no task with id {task_id}")
        return count
