from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.database import init_models
from shared.config.settings import CORS_ORIGINS, SERVICE_NAME
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.auth_service import models as auth_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.comment_service import models as comment_models  # noqa: F401

from services.auth_service.router import router as auth_router, admin_auth_router, admin_router as admin_users_router
from services.product_service.router import router as product_router, admin_router as admin_products_router
from services.order_service.router import router as order_router, admin_router as admin_orders_router
from services.comment_service.router import router as comment_router
from services.notification_service import Mailer, NotificationDispatcher

app = FastAPI(
    title="Antique Store API",
    version="2.0.0",
    description="Storefront and admin backend: catalog, comments, checkout, order lifecycle, accounts.",
)

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, SERVICE_NAME)

# --- SECURITY SETUP ---
app.state.limiter = limiter
register_exception_handlers(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api/user")
app.include_router(product_router, prefix="/api/user")
app.include_router(order_router, prefix="/api/user")
app.include_router(comment_router, prefix="/api/user")

app.include_router(admin_auth_router, prefix="/api/admin")
app.include_router(admin_users_router, prefix="/api/admin")
app.include_router(admin_products_router, prefix="/api/admin")
app.include_router(admin_orders_router, prefix="/api/admin")


@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": SERVICE_NAME, "status": "running"}


@app.on_event("startup")
async def startup_event():
    await init_models()
    app.state.notifications = NotificationDispatcher(Mailer.from_settings())
