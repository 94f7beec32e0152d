# tastetab/api/bills.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
from pymongo.errors import PyMongoError

from tastetab import schemas
from tastetab.api.deps import get_admin_user, get_staff_user
from tastetab.core.errors import APIError
from tastetab.database import BILLS, get_db, serialize_doc

logger = logging.getLogger(__name__)

router = APIRouter()


def fetch_all_bills(db: Database) -> list:
    try:
        return list(db[BILLS].find())
    except PyMongoError as e:
        logger.error(f"Failed to fetch bills: {e}")
        raise APIError(500, "Failed to fetch bills")


@router.get("/bills")
def list_bills(_: dict = Depends(get_admin_user), db: Database = Depends(get_db)):
    return [serialize_doc(bill) for bill in fetch_all_bills(db)]


@router.post("/bills", status_code=status.HTTP_201_CREATED)
def create_bill(bill: schemas.BillCreate, claims: dict = Depends(get_staff_user), db: Database = Depends(get_db)):
    # Totals are stored exactly as the till sent them; nothing is recomputed
    # against the line items or the menu.
    doc = bill.model_dump()
    doc["date"] = datetime.now(timezone.utc)
    try:
        result = db[BILLS].insert_one(doc)
    except PyMongoError as e:
        logger.error(f"Failed to save bill: {e}")
        raise APIError(400, "Failed to save bill")
    doc["_id"] = result.inserted_id
    logger.info(
        f"Bill {result.inserted_id} saved by {claims.get('id')}: "
        f"{doc['grandTotal']} {doc['paymentMethod']} {doc['status']}"
    )
    return serialize_doc(doc)
