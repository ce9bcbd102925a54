"""Lookups for payment counterparties (customers and suppliers)."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.models.supplier import Supplier


class CRUDCustomer:
    def find_by_id(self, db: Session, customer_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id, Customer.deleted_at.is_(None)).first()


class CRUDSupplier:
    def find_by_id(self, db: Session, supplier_id: int) -> Optional[Supplier]:
        return db.query(Supplier).filter(Supplier.id == supplier_id, Supplier.deleted_at.is_(None)).first()


customer_crud = CRUDCustomer()
supplier_crud = CRUDSupplier()
