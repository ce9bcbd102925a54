import logging
import os

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.currency import Currency
from backend.app.models.payment_method import PaymentMethod
from backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_USERS = [
    "owner@bizledger.io",
]
DEFAULT_CURRENCIES = [
    ("EUR", "Euro", "€"),
]
DEFAULT_PAYMENT_METHODS = [
    ("Cash", "cash"),
    ("Bank transfer", "bank_transfer"),
]


def ensure_dev_reference_data(db: Session) -> None:
    """
    Create a default user, currency and payment methods for local development.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    created = []
    for email in DEFAULT_DEV_USERS:
        if db.query(User).filter(User.email == email).first():
            continue
        db.add(User(email=email, hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD), is_active=True))
        created.append(email)

    for code, name, symbol in DEFAULT_CURRENCIES:
        if db.query(Currency).filter(Currency.code == code).first():
            continue
        db.add(Currency(code=code, name=name, symbol=symbol))
        created.append(code)

    for name, method_type in DEFAULT_PAYMENT_METHODS:
        if db.query(PaymentMethod).filter(PaymentMethod.name == name).first():
            continue
        db.add(PaymentMethod(name=name, type=method_type))
        created.append(name)

    if created:
        db.commit()
        logger.info("Seeded development reference data", extra={"seeded": ",".join(created)})
