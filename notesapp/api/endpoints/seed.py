"""
Seed Endpoint

Resets the database to the demo tenants. Only mounted when
ENABLE_SEED_ENDPOINT is set and ENVIRONMENT is "development"; it deletes
everything and needs no auth.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notesapp.database import get_db
from notesapp.seed import seed_demo_data

router = APIRouter(prefix="/seed", tags=["development"])


@router.post("")
def seed_database(db: Session = Depends(get_db)):
    summary = seed_demo_data(db)
    return {
        "success": True,
        "message": "Database seeded successfully!",
        "data": summary,
    }
