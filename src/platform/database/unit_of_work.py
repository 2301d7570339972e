"""
Unit of Work Pattern - one asyncpg connection + transaction per command

Architecture:
- UoW owns the connection lifecycle (acquire from pool / release)
- UoW owns commit/rollback
- Repositories created by the UoW share its connection, so every statement
  they issue runs inside the same transaction
- Use cases coordinate several repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Optional

import asyncpg
from asyncpg.transaction import Transaction

from src.platform.database.asyncpg_setting import get_asyncpg_pool


if TYPE_CHECKING:
    from src.service.device_loan.app.interface.i_inventory_allocator import IInventoryAllocator
    from src.service.device_loan.app.interface.i_inventory_command_repo import (
        IInventoryCommandRepo,
    )
    from src.service.device_loan.app.interface.i_loan_command_repo import ILoanCommandRepo
    from src.service.device_loan.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            inventory_id = await uow.inventory_allocator.acquire(device_id=...)
            await uow.reservation_command_repo.create(reservation=...)
            await uow.commit()

    Leaving the block without commit() rolls the transaction back.
    """

    inventory_allocator: IInventoryAllocator
    inventory_command_repo: IInventoryCommandRepo
    reservation_command_repo: IReservationCommandRepo
    loan_command_repo: ILoanCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        """Roll back unless already committed. Must be idempotent."""
        raise NotImplementedError


class AsyncpgUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self._pool: Optional[asyncpg.Pool] = None
        self._conn: Optional[asyncpg.Connection] = None
        self._transaction: Optional[Transaction] = None
        self._finished = False

    async def __aenter__(self) -> AsyncpgUnitOfWork:
        from src.service.device_loan.driven_adapter.repo.inventory_allocator_impl import (
            InventoryAllocatorImpl,
        )
        from src.service.device_loan.driven_adapter.repo.inventory_command_repo_impl import (
            InventoryCommandRepoImpl,
        )
        from src.service.device_loan.driven_adapter.repo.loan_command_repo_impl import (
            LoanCommandRepoImpl,
        )
        from src.service.device_loan.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )

        self._pool = await get_asyncpg_pool()
        self._conn = await self._pool.acquire()
        try:
            self._transaction = self._conn.transaction()
            await self._transaction.start()
        except BaseException:
            await self._pool.release(self._conn)
            self._conn = None
            raise
        self._finished = False

        # Repositories share this connection (and therefore the transaction)
        self.inventory_allocator = InventoryAllocatorImpl(conn=self._conn)
        self.inventory_command_repo = InventoryCommandRepoImpl(conn=self._conn)
        self.reservation_command_repo = ReservationCommandRepoImpl(conn=self._conn)
        self.loan_command_repo = LoanCommandRepoImpl(conn=self._conn)

        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._pool is not None and self._conn is not None:
                await self._pool.release(self._conn)
            self._conn = None
            self._transaction = None

    async def _commit(self) -> None:
        if self._transaction is None or self._finished:
            raise RuntimeError('No active transaction to commit')
        await self._transaction.commit()
        self._finished = True

    async def rollback(self) -> None:
        if self._transaction is None or self._finished:
            return
        self._finished = True
        await self._transaction.rollback()
