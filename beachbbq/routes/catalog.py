# beachbbq/routes/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from beachbbq import catalog, schemas
from beachbbq.dependencies import get_weather_client
from beachbbq.weather import WeatherClient

router = APIRouter(
    prefix="/api",
    tags=["Catalog"]
)

# Public - Beach Locations
@router.get("/locations", response_model=List[schemas.LocationOut])
def list_locations():
    return catalog.LOCATIONS

# Public - Packages
@router.get("/packages", response_model=List[schemas.PackageOut])
def list_packages():
    return catalog.PACKAGES

@router.get("/time-slots", response_model=List[str])
def list_time_slots():
    return list(catalog.TIME_SLOTS)

# Public - Current Weather at a Beach
@router.get("/weather", response_model=schemas.WeatherOut)
def current_weather(location: str, client: WeatherClient = Depends(get_weather_client)):
    if catalog.find_location_by_name(location) is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return client.current(location)
