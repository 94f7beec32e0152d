# tastetab/api/items.py
import copy
import logging

from fastapi import APIRouter, Depends, status
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from tastetab import schemas
from tastetab.api.deps import get_admin_user
from tastetab.core.errors import APIError
from tastetab.database import ITEMS, get_db, parse_object_id, serialize_doc
from tastetab.dataset import MENU_ITEMS

logger = logging.getLogger(__name__)

# Admin menu management, mounted under /dashboard
router = APIRouter()

# Unauthenticated listing and seeding, mounted under /api
public_router = APIRouter()


def _list_items(db: Database) -> list:
    try:
        return [serialize_doc(doc) for doc in db[ITEMS].find()]
    except PyMongoError as e:
        logger.error(f"Failed to fetch items: {e}")
        raise APIError(500, "Failed to fetch items")


# --- Admin CRUD ---

@router.get("/items")
def list_items(_: dict = Depends(get_admin_user), db: Database = Depends(get_db)):
    return _list_items(db)


@router.post("/items", status_code=status.HTTP_201_CREATED)
def create_item(item: schemas.MenuItemIn, _: dict = Depends(get_admin_user), db: Database = Depends(get_db)):
    doc = item.model_dump()
    try:
        result = db[ITEMS].insert_one(doc)
    except PyMongoError as e:
        logger.error(f"Failed to add item {item.name}: {e}")
        raise APIError(400, "Failed to add item")
    doc["_id"] = result.inserted_id
    return serialize_doc(doc)


@router.put("/items/{item_id}")
def update_item(
    item_id: str,
    item: schemas.MenuItemIn,
    _: dict = Depends(get_admin_user),
    db: Database = Depends(get_db),
):
    oid = parse_object_id(item_id)
    if oid is None:
        raise APIError(400, "Failed to update item")
    try:
        updated = db[ITEMS].find_one_and_update(
            {"_id": oid},
            {"$set": item.model_dump()},
            return_document=ReturnDocument.AFTER,
        )
    except PyMongoError as e:
        logger.error(f"Failed to update item {item_id}: {e}")
        raise APIError(400, "Failed to update item")
    if not updated:
        raise APIError(404, "Item not found")
    return serialize_doc(updated)


@router.delete("/items/{item_id}")
def delete_item(item_id: str, _: dict = Depends(get_admin_user), db: Database = Depends(get_db)):
    oid = parse_object_id(item_id)
    if oid is None:
        raise APIError(400, "Failed to delete item")
    try:
        result = db[ITEMS].delete_one({"_id": oid})
    except PyMongoError as e:
        logger.error(f"Failed to delete item {item_id}: {e}")
        raise APIError(400, "Failed to delete item")
    if result.deleted_count == 0:
        raise APIError(404, "Item not found")
    return {"message": "Item deleted"}


# --- Public catalog ---

@public_router.get("/items")
def public_list_items(db: Database = Depends(get_db)):
    return _list_items(db)


@public_router.post("/insert-items", status_code=status.HTTP_201_CREATED)
def insert_items(db: Database = Depends(get_db)):
    # insert_many adds _id to each dict, so never hand it the module-level list
    docs = copy.deepcopy(MENU_ITEMS)
    try:
        db[ITEMS].insert_many(docs)
    except PyMongoError as e:
        logger.error(f"Failed to insert items: {e}")
        raise APIError(500, "Item insertion failed")
    logger.info(f"Seeded {len(docs)} menu items")
    return [serialize_doc(doc) for doc in docs]
