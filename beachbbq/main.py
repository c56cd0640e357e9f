# beachbbq/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from beachbbq.config import settings
from beachbbq.database import engine, Base, SessionLocal
from beachbbq.equipment import SqlEquipmentRegistry
from beachbbq.errors import BookingError
from beachbbq.routes import affiliates, bookings, catalog, driver, equipment, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format=f"[{settings.ENVIRONMENT.upper()}] %(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create the database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Beach BBQ Booking",
    description="Beach BBQ rental and delivery bookings",
    version="1.0.0"
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(BookingError)
async def handle_booking_error(request: Request, exc: BookingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

# Malformed bodies and query strings are plain bad requests
@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

# Registering Routers
app.include_router(users.router)
app.include_router(catalog.router)
app.include_router(bookings.router)
app.include_router(driver.router)
app.include_router(equipment.router)
app.include_router(affiliates.router)

@app.on_event("startup")
def seed_equipment():
    if not settings.SEED_EQUIPMENT:
        return
    db = SessionLocal()
    try:
        created = SqlEquipmentRegistry(db).ensure_pool(settings.MAX_UNITS)
        if created:
            logger.info("Seeded %s BBQ units", len(created))
    finally:
        db.close()

@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Welcome to Beach BBQ Booking"}

@app.get("/health", tags=["Root"])
def health():
    return {"status": "ok", "environment": settings.ENVIRONMENT}
