# sitepulse/adapters/outbound/persistence/repositories/client_repository.py

"""
Repository for client operations (the credential store).

Performs the database operations related to API clients,
implementing the IClientRepository interface.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sitepulse.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from sitepulse.adapters.outbound.persistence.models import Client
from sitepulse.application.ports.outbound import IClientRepository
from sitepulse.domain.models.client_domain_model import Client as DomainClient
from sitepulse.domain.exceptions import DatabaseOperationException, DuplicateClientException


class AsyncClientCRUD(AsyncCRUDBase[Client], IClientRepository):
    """
    Async repository for the Client entity.

    Lookups by public client_id and registration guarded by the
    unique index on client_id.
    """

    async def get_by_client_id(self, db: AsyncSession, client_id: str) -> Optional[DomainClient]:
        """
        Find a client by client_id.

        Args:
            db: Async database session
            client_id: Client identifier

        Returns:
            Client found or None if it doesn't exist

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = select(Client).where(Client.client_id == client_id)
            result = await db.execute(query)
            client = result.scalar_one_or_none()
            return self.to_domain(client) if client else None
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching client by client_id '{client_id}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching client by client_id",
                original_error=e
            )

    async def register(self, db: AsyncSession, client_id: str, secret_hash: str) -> DomainClient:
        """
        Store a new client identity.

        Args:
            db: Async database session
            client_id: Public client identifier
            secret_hash: Already-hashed client secret

        Returns:
            The created client

        Raises:
            DuplicateClientException: If client_id is already registered
            DatabaseOperationException: In case of database error
        """
        if await self.get_by_client_id(db, client_id) is not None:
            raise DuplicateClientException(client_id)

        try:
            client = Client(client_id=client_id, client_secret=secret_hash)
            db.add(client)
            await db.commit()
            await db.refresh(client)

            self.logger.info(f"Client registered: {client.id} (client_id: {client_id})")
            return self.to_domain(client)

        except IntegrityError:
            # Lost a race with a concurrent registration of the same id
            await db.rollback()
            raise DuplicateClientException(client_id)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error registering client: {str(e)}")
            raise DatabaseOperationException(
                detail="Error registering client",
                original_error=e
            )

    def to_domain(self, db_model: Client) -> DomainClient:
        """
        Convert database model to domain model.
        """
        return DomainClient(
            id=db_model.id,
            client_id=db_model.client_id,
            client_secret=db_model.client_secret,
            created_at=db_model.created_at,
        )


# Public instance to be used by use cases
client_repository = AsyncClientCRUD(Client)
