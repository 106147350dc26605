# purchases.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from auth import current_user
from db import get_db
from security import Principal
from services import PurchaseOutcome, list_purchased, purchase

router = APIRouter()

@router.post("/users/courses/{course_id}")
def buy_course(course_id: str, user: Principal = Depends(current_user), db: Session = Depends(get_db)):
    outcome = purchase(db, user, course_id)
    if outcome is PurchaseOutcome.ALREADY_PURCHASED:
        return JSONResponse({"message": "Course already purchased", "status": outcome.value}, status_code=200)
    return JSONResponse({"message": "Course purchased successfully", "status": outcome.value}, status_code=201)

@router.get("/users/purchasedCourses")
def my_courses(user: Principal = Depends(current_user), db: Session = Depends(get_db)):
    courses = list_purchased(db, user)
    return {"purchasedCourses": [c.to_dict() for c in courses]}
