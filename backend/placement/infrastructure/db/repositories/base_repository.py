"""
Base Repository for the Placement Tracker

Generic async repository implementing the shared read/create operations.
Repositories flush but never commit: the session owner decides the
transaction boundary.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Type
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from placement.infrastructure.exceptions import ConflictError


# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SQLModel)


class IReadRepository(ABC, Generic[ModelType]):
    """
    Interface for read operations (Interface Segregation Principle).

    Separates read concerns from write concerns.
    """

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """Get a single record by ID."""
        pass

    @abstractmethod
    async def exists(self, id: UUID) -> bool:
        """Check if a record exists."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Get total count of records."""
        pass


class IWriteRepository(ABC, Generic[ModelType, CreateSchemaType]):
    """
    Interface for write operations (Interface Segregation Principle).

    Separates write concerns from read concerns.
    """

    @abstractmethod
    async def create(self, data: CreateSchemaType) -> ModelType:
        """Create a new record."""
        pass

    @abstractmethod
    async def create_many(self, data_list: List[CreateSchemaType]) -> List[ModelType]:
        """Create several records in one flush."""
        pass


class BaseRepository(
    IReadRepository[ModelType],
    IWriteRepository[ModelType, CreateSchemaType],
    Generic[ModelType, CreateSchemaType]
):
    """
    Generic async repository.

    Args:
        model: The SQLModel class to operate on
        session: Async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self._model = model
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Get the current session."""
        return self._session

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its primary key.

        Args:
            id: UUID primary key

        Returns:
            Model instance or None if not found
        """
        return await self._session.get(self._model, id)

    async def exists(self, id: UUID) -> bool:
        """
        Check if a record exists.

        Args:
            id: UUID primary key

        Returns:
            True if exists, False otherwise
        """
        result = await self.get_by_id(id)
        return result is not None

    async def count(self) -> int:
        """
        Get total count of records.

        Returns:
            Total number of records
        """
        stmt = select(func.count()).select_from(self._model)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, data: CreateSchemaType) -> ModelType:
        """
        Create a new record.

        Args:
            data: Create schema with field values

        Returns:
            Created model instance

        Raises:
            ConflictError: if a unique constraint rejects the row
        """
        db_obj = self._model.model_validate(data)
        self._session.add(db_obj)
        await self._flush_or_conflict()
        await self._session.refresh(db_obj)
        return db_obj

    async def create_many(self, data_list: List[CreateSchemaType]) -> List[ModelType]:
        """
        Bulk create multiple records in a single flush.

        Either every row reaches the transaction or the flush fails as a whole.

        Args:
            data_list: List of create schemas

        Returns:
            List of created model instances
        """
        db_objects = [self._model.model_validate(data) for data in data_list]
        if not db_objects:
            return []
        self._session.add_all(db_objects)
        await self._flush_or_conflict()
        return db_objects

    async def _flush_or_conflict(self) -> None:
        """Flush pending rows, turning unique-constraint violations into ConflictError."""
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Duplicate {self._model.__name__} rejected by storage constraint",
                operation="insert",
                table=getattr(self._model, "__tablename__", None),
                original_error=e,
            ) from e
