from typing import Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.dialects import postgresql, sqlite

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

async def upsert(
    db: AsyncSession,
    model,
    values: dict,
    conflict_columns: Iterable[str],
    update_columns: Iterable[str]
) -> None:
    """INSERT ... ON CONFLICT DO UPDATE 단일 문장으로 upsert"""
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"upsert를 지원하지 않는 데이터베이스입니다: {dialect}")

    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=list(conflict_columns),
        set_={column: stmt.excluded[column] for column in update_columns}
    )
    await db.execute(stmt)
