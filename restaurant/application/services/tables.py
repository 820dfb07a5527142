from typing import Sequence

from restaurant.application.errors import NotFoundError
from restaurant.application.schemas import TableCreate, TableUpdate
from restaurant.domain.models import Table
from restaurant.infrastructure.unit_of_work import UnitOfWork


class TableService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def list(self) -> Sequence[Table]:
        return self.uow.tables.list()

    def get(self, table_id: str) -> Table:
        table = self.uow.tables.get(table_id)
        if not table:
            raise NotFoundError("Table not found")
        return table

    def create(self, data: TableCreate) -> Table:
        with self.uow:
            table = self.uow.tables.add(Table(**data.model_dump()))
        return table

    def update(self, table_id: str, data: TableUpdate) -> Table:
        with self.uow:
            table = self.get(table_id)
            for field, value in data.model_dump(exclude_none=True).items():
                setattr(table, field, value)
            table = self.uow.tables.save(table)
        return table

    def delete(self, table_id: str) -> None:
        with self.uow:
            self.uow.tables.soft_delete(self.get(table_id))

    def restore(self, table_id: str) -> Table:
        with self.uow:
            table = self.uow.tables.get_deleted(table_id)
            if not table:
                raise NotFoundError("Deleted table not found")
            table = self.uow.tables.restore(table)
        return table
