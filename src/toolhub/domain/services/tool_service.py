"""Service for managing the tool catalogue."""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.core.logging import get_logger
from toolhub.infrastructure.persistence.models import ToolModel
from toolhub.infrastructure.persistence.repositories import ToolRepository

logger = get_logger(__name__)


class ToolAlreadyRegisteredError(Exception):
    """Raised when a tool name is already taken."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class ToolService:
    """CRUD operations on tools with name uniqueness enforced."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = ToolRepository(session)

    async def list_tools(self) -> list[ToolModel]:
        return await self.repository.list_all()

    async def get_tool(self, tool_id: str) -> ToolModel | None:
        return await self.repository.get_by_id(tool_id)

    async def create_tool(self, name: str, description: str, website: str) -> ToolModel:
        """Create a tool.

        Raises:
            ToolAlreadyRegisteredError: If the name is taken.
        """
        if await self.repository.name_exists(name):
            raise ToolAlreadyRegisteredError(name)

        tool = ToolModel(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            website=website,
        )
        try:
            await self.repository.create(tool)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ToolAlreadyRegisteredError(name) from e

        logger.info("Tool created", tool_id=tool.id, name=name)
        return tool

    async def update_tool(
        self, tool: ToolModel, name: str, description: str, website: str
    ) -> ToolModel:
        if name != tool.name and await self.repository.name_exists(name, exclude_id=tool.id):
            raise ToolAlreadyRegisteredError(name)

        try:
            await self.repository.update(
                tool, {"name": name, "description": description, "website": website}
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ToolAlreadyRegisteredError(name) from e

        logger.info("Tool updated", tool_id=tool.id)
        return tool

    async def delete_tool(self, tool_id: str) -> None:
        await self.repository.delete(tool_id)
        await self.session.commit()
        logger.info("Tool deleted", tool_id=tool_id)
