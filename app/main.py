from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.common.error_handlers import register_error_handlers
from app.api.v1 import auth, user, customer, category, transaction, hpp, business_settings, report

app = FastAPI(title="Bookkeeping API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register API routers
app.include_router(auth.router, prefix="/api/v1/auth", tags=["authentication"])
app.include_router(user.router, prefix="/api/v1/users", tags=["users"])
app.include_router(
    customer.router, prefix="/api/v1/customers", tags=["customers"])
app.include_router(
    category.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(
    transaction.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(
    hpp.router, prefix="/api/v1/hpp-calculations", tags=["hpp"])
app.include_router(
    business_settings.router, prefix="/api/v1/business-settings", tags=["business settings"])
app.include_router(
    report.router, prefix="/api/v1/reports", tags=["reports"])


@app.get("/")
def read_root():
    return {"message": "Welcome to the Bookkeeping APIs!"}
