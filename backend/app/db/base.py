from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.currency import Currency  # noqa: F401
from backend.app.models.payment_method import PaymentMethod  # noqa: F401
from backend.app.models.customer import Customer  # noqa: F401
from backend.app.models.supplier import Supplier  # noqa: F401
from backend.app.models.customer_invoice import CustomerInvoice  # noqa: F401
from backend.app.models.supplier_invoice import SupplierInvoice  # noqa: F401
from backend.app.models.order import PurchaseOrder, SalesOrder  # noqa: F401
from backend.app.models.bank_account import BankAccount  # noqa: F401
from backend.app.models.cash_register import CashRegister, CashRegisterSession, CashRegisterTransaction  # noqa: F401
from backend.app.models.payment import Payment  # noqa: F401
from backend.app.models.audit_log import AuditLog  # noqa: F401
