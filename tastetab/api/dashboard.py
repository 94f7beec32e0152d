# tastetab/api/dashboard.py
from fastapi import APIRouter, Depends

from tastetab.api.deps import get_admin_user, get_staff_user

router = APIRouter()


@router.get("/admin/dashboard")
def admin_dashboard(claims: dict = Depends(get_admin_user)):
    return {"message": "Welcome to Admin Dashboard", "user": claims}


@router.get("/user/dashboard")
def user_dashboard(claims: dict = Depends(get_staff_user)):
    return {"message": "Welcome to User Dashboard", "user": claims}
