"""Tool repository for database operations."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.infrastructure.persistence.models import ToolModel


class ToolRepository:
    """Repository for tool database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, tool: ToolModel) -> ToolModel:
        self.session.add(tool)
        await self.session.flush()
        return tool

    async def list_all(self) -> list[ToolModel]:
        result = await self.session.execute(select(ToolModel).order_by(ToolModel.created_at))
        return list(result.scalars().all())

    async def get_by_id(self, tool_id: str) -> ToolModel | None:
        result = await self.session.execute(select(ToolModel).where(ToolModel.id == tool_id))
        return result.scalar_one_or_none()

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Check if a tool name is taken, optionally ignoring one tool."""
        query = select(ToolModel.id).where(ToolModel.name == name)
        if exclude_id is not None:
            query = query.where(ToolModel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def update(self, tool: ToolModel, values: dict[str, Any]) -> ToolModel:
        for key, value in values.items():
            setattr(tool, key, value)
        await self.session.flush()
        return tool

    async def delete(self, tool_id: str) -> None:
        await self.session.execute(delete(ToolModel).where(ToolModel.id == tool_id))
        await self.session.flush()
