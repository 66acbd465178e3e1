"""
Base repository.

Generic CRUD operations for all repositories.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.models.base import Base

# Generic type for model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with generic CRUD operations.

    Provides async database operations for any SQLAlchemy model.

    Type Parameters:
        ModelType: SQLAlchemy model class

    Example:
        class RewardAccountRepository(BaseRepository[RewardAccount]):
            def __init__(self, session: AsyncSession):
                super().__init__(RewardAccount, session)
    """

    def __init__(
        self, model: type[ModelType], session: AsyncSession
    ) -> None:
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def _select(self) -> Select:
        """
        SELECT for the model that overwrites identity-map state.

        Conditional updates run with synchronize_session=False, so rows
        already loaded in this session must be refreshed on read.
        """
        return select(self.model).execution_options(populate_existing=True)

    async def get_by_id(self, id: int, fresh: bool = False) -> ModelType | None:
        """
        Get entity by ID.

        Args:
            id: Entity ID
            fresh: Reload from the database even if the entity is in the
                identity map (needed after conditional bulk updates)

        Returns:
            Entity or None if not found
        """
        if not fresh:
            return await self.session.get(self.model, id)

        stmt = self._select().where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **data: Any) -> ModelType:
        """
        Create new entity.

        Args:
            **data: Entity data

        Returns:
            Created entity
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching filters.

        Args:
            **filters: Column filters

        Returns:
            Count of matching entities
        """
        stmt = select(func.count()).select_from(self.model)

        if filters:
            stmt = stmt.filter_by(**filters)

        result = await self.session.execute(stmt)
        return result.scalar() or 0
