# beachbbq/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from beachbbq import database
from beachbbq.affiliates import AffiliateLedger
from beachbbq.equipment import SqlEquipmentRegistry
from beachbbq.ledger import SqlBookingLedger
from beachbbq.weather import WeatherClient


def get_ledger(db: Session = Depends(database.get_db)) -> SqlBookingLedger:
    return SqlBookingLedger(db)


def get_registry(db: Session = Depends(database.get_db)) -> SqlEquipmentRegistry:
    return SqlEquipmentRegistry(db)


def get_affiliates(db: Session = Depends(database.get_db)) -> AffiliateLedger:
    return AffiliateLedger(db)


def get_weather_client() -> WeatherClient:
    return WeatherClient()
