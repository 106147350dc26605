# courses.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from auth import current_admin, current_user
from db import get_db
from security import Principal
import services

router = APIRouter()


class CourseDetails(BaseModel):
    """Raw course fields; sanitizing and validation happen in services"""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[Any] = None
    description: Optional[Any] = None
    price: Optional[Any] = None
    image_link: Optional[Any] = Field(None, alias="imageLink")
    published: Optional[Any] = None


@router.post("/admin/courses", status_code=status.HTTP_201_CREATED)
def create_course(
    body: CourseDetails,
    admin: Principal = Depends(current_admin),
    db: Session = Depends(get_db),
):
    course = services.create_course(db, admin, body.model_dump())
    return {"message": "Course created successfully", "courseId": course.id}

@router.put("/admin/courses/{course_id}")
def update_course(
    course_id: str,
    body: CourseDetails,
    admin: Principal = Depends(current_admin),
    db: Session = Depends(get_db),
):
    course = services.update_course(db, admin, course_id, body.model_dump())
    return {"message": "Course updated successfully", "course": course.to_dict()}

@router.get("/admin/courses")
def admin_courses(admin: Principal = Depends(current_admin), db: Session = Depends(get_db)):
    courses = services.list_courses_for_admin(db, admin)
    return {"courses": [c.to_dict() for c in courses]}

@router.get("/admin/courses/{course_id}")
def admin_course_detail(course_id: str, admin: Principal = Depends(current_admin), db: Session = Depends(get_db)):
    return {"course": services.get_course_for_admin(db, admin, course_id).to_dict()}

@router.get("/users/courses")
def user_courses(user: Principal = Depends(current_user), db: Session = Depends(get_db)):
    # только опубликованные
    courses = services.list_courses_for_user(db, user)
    return {"courses": [c.to_dict() for c in courses]}

@router.get("/users/courses/{course_id}")
def user_course_detail(course_id: str, user: Principal = Depends(current_user), db: Session = Depends(get_db)):
    return {"course": services.get_course_for_user(db, user, course_id).to_dict()}
