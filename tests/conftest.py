"""Pytest fixtures: on-disk SQLite database, seeded rows, app client with a recording mailer."""

import asyncio
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="antique-store-tests-")

# Must be set before any application module reads its settings.
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["TRACING_ENABLED"] = "false"
os.environ["MAIL_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["NOTIFICATION_RETRY_DELAY"] = "0"

import pytest
from fastapi.testclient import TestClient

from services.auth_service.models import User
from services.auth_service.service import AuthService
from services.comment_service.models import Comment  # noqa: F401  (registers the table)
from services.order_service.models import Order
from services.product_service.models import Product
from shared.config.database import AsyncSessionLocal, Base, engine
from shared.security import create_access_token

DEFAULT_PASSWORD = "secret123"

ADDRESS = {
    "full_name": "Asha Verma",
    "street": "12 Lake Road",
    "city": "Pune",
    "state": "Maharashtra",
    "zip": "411001",
    "country": "India",
    "tag": "home",
}


class RecordingMailer:
    """Mailer double: fails the first `failures` sends, then records messages."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.attempts = 0
        self.sent = []

    async def send(self, message):
        self.attempts += 1
        if self.failures:
            self.failures -= 1
            raise ConnectionError("SMTP server unavailable")
        self.sent.append(message)
        return True


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def order_placed(self, order, customer):
        self.events.append(("order_placed", order.id, getattr(customer, "email", None)))

    def status_updated(self, order, customer):
        self.events.append(("status_updated", order.id, getattr(customer, "email", None)))

    def order_cancelled(self, order, customer, cancelled_by):
        self.events.append(("order_cancelled", order.id, cancelled_by))


async def reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def build_user(name, email, is_admin=False, is_blocked=False, password=DEFAULT_PASSWORD):
    return User(
        name=name,
        email=email,
        hashed_password=AuthService.hash_password(password),
        is_admin=is_admin,
        is_blocked=is_blocked,
    )


def build_product(name, price, stock, images=None, status="Active", category=None):
    return Product(
        name=name,
        description=f"{name} in good condition",
        price=price,
        stock=stock,
        images=images if images is not None else [f"/uploads/{name.lower().replace(' ', '-')}.jpg"],
        status=status,
        category=category,
    )


def build_order(user, product, qty=1, status="processing", payment_method="upi"):
    return Order(
        user_id=user.id,
        items=[{
            "product": product.id,
            "name": product.name,
            "price": product.price,
            "qty": qty,
            "image": "",
        }],
        shipping_address=dict(ADDRESS),
        total_amount=product.price * qty,
        payment_method=payment_method,
        payment_status="pending" if payment_method == "cod" else "paid",
        order_status=status,
    )


async def _persist(row):
    async with AsyncSessionLocal() as session:
        session.add(row)
        await session.commit()
        await session.refresh(row)
        return row


async def _fetch(model, row_id):
    async with AsyncSessionLocal() as session:
        return await session.get(model, row_id)


def auth_headers(user) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


# --- Service-level fixtures (async) ---

@pytest.fixture
async def db():
    await reset_schema()
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def add(db):
    """Insert a row through the test session and return it refreshed."""
    async def _add(row):
        db.add(row)
        await db.commit()
        await db.refresh(row)
        return row
    return _add


# --- API fixtures (sync, TestClient) ---

class Seeder:
    """Writes and reads rows outside the app's request cycle."""

    def user(self, name="Asha Verma", email="asha@example.com", **kwargs):
        return asyncio.run(_persist(build_user(name, email, **kwargs)))

    def admin(self, name="Store Admin", email="admin@example.com"):
        return self.user(name=name, email=email, is_admin=True)

    def product(self, name="Brass Lantern", price=100.0, stock=5, **kwargs):
        return asyncio.run(_persist(build_product(name, price, stock, **kwargs)))

    def order(self, user, product, **kwargs):
        return asyncio.run(_persist(build_order(user, product, **kwargs)))

    def get_product(self, product_id):
        return asyncio.run(_fetch(Product, product_id))

    def get_order(self, order_id):
        return asyncio.run(_fetch(Order, order_id))


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(mailer):
    asyncio.run(reset_schema())

    from main import app
    from services.notification_service import NotificationDispatcher, get_dispatcher

    app.dependency_overrides[get_dispatcher] = lambda: NotificationDispatcher(mailer, max_attempts=2, retry_delay=0)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seed(client):
    return Seeder()
