# store.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import DuplicateIdentity
from models import Admin, User, Course, UserCourse

logger = logging.getLogger(__name__)

ROLE_MODELS = {"admin": Admin, "user": User}


class CredentialStore:
    def __init__(self, db: Session, role: str):
        self.db = db
        self.role = role
        self.model = ROLE_MODELS[role]

    def find_by_username(self, username: str):
        return self.db.query(self.model).filter(self.model.username == username).first()

    def find_by_id(self, identity_id: int):
        return self.db.get(self.model, identity_id)

    def insert(self, username: str, hashed_password: str):
        record = self.model(username=username, hashed_password=hashed_password)
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Concurrent %s signup lost for %s", self.role, username)
            raise DuplicateIdentity()
        self.db.refresh(record)
        return record


class CourseStore:
    def __init__(self, db: Session):
        self.db = db

    def find(self, course_id: int) -> Optional[Course]:
        return self.db.get(Course, course_id)

    def insert(self, data: Dict[str, Any]) -> Course:
        course = Course(**data)
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        return course

    def update(self, course: Course, data: Dict[str, Any]) -> Course:
        for k, v in data.items():
            setattr(course, k, v)
        self.db.commit()
        self.db.refresh(course)
        return course

    def list_all(self) -> List[Course]:
        return self.db.query(Course).order_by(Course.id).all()

    def list_published(self) -> List[Course]:
        return self.db.query(Course).filter(Course.published.is_(True)).order_by(Course.id).all()


class PurchaseLedger:
    def __init__(self, db: Session):
        self.db = db

    def exists(self, user_id: int, course_id: int) -> bool:
        return self.db.query(UserCourse).filter_by(user_id=user_id, course_id=course_id).first() is not None

    def record(self, user_id: int, course_id: int) -> bool:
        """Insert the pair; False when it was already there"""
        if self.exists(user_id, course_id):
            return False
        self.db.add(UserCourse(user_id=user_id, course_id=course_id))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        return True

    def courses_of(self, user_id: int) -> List[Course]:
        return (
            self.db.query(Course)
            .join(UserCourse, UserCourse.course_id == Course.id)
            .filter(UserCourse.user_id == user_id)
            .order_by(UserCourse.id)
            .all()
        )
