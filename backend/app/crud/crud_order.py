"""Existence checks for sales and purchase orders."""

from typing import Optional

from sqlalchemy.orm import Session

from backend.app.models.order import PurchaseOrder, SalesOrder


class CRUDSalesOrder:
    def find_by_id(self, db: Session, order_id: int) -> Optional[SalesOrder]:
        return db.query(SalesOrder).filter(SalesOrder.id == order_id, SalesOrder.deleted_at.is_(None)).first()


class CRUDPurchaseOrder:
    def find_by_id(self, db: Session, order_id: int) -> Optional[PurchaseOrder]:
        return (
            db.query(PurchaseOrder)
            .filter(PurchaseOrder.id == order_id, PurchaseOrder.deleted_at.is_(None))
            .first()
        )


sales_order_crud = CRUDSalesOrder()
purchase_order_crud = CRUDPurchaseOrder()
