"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (departments,
students). Repositories return SQLModel objects, use `None` for
absence and perform commits/refreshes where appropriate.
"""

from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy import func
from . import models


class DepartmentRepository:
    """Lookup and persistence for `Department` rows."""
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, department_id: int) -> Optional[models.Department]:
        """Get a `Department` by primary key or `None`."""
        if department_id > models.MAX_ID:
            return None
        return self.session.get(models.Department, department_id)

    def find_by_name(self, name: str) -> Optional[models.Department]:
        """Return the department whose name matches exactly, or `None`."""
        stmt = select(models.Department).where(models.Department.name == name)
        return self.session.exec(stmt).first()

    def find_all(self) -> List[models.Department]:
        stmt = select(models.Department).order_by(models.Department.id)
        return self.session.exec(stmt).all()

    def save(self, department: models.Department) -> models.Department:
        """Persist a department and return the managed instance."""
        self.session.add(department)
        self.session.commit()
        self.session.refresh(department)
        return department


class StudentRepository:
    """CRUD operations for `Student` rows."""
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key or `None`."""
        if student_id > models.MAX_ID:
            return None
        return self.session.get(models.Student, student_id)

    def find_all(self) -> List[models.Student]:
        stmt = select(models.Student).order_by(models.Student.id)
        return self.session.exec(stmt).all()

    def find_by_department_name(self, name: str) -> List[models.Student]:
        """Return the students of the department called `name`."""
        stmt = (
            select(models.Student)
            .join(models.Department)
            .where(models.Department.name == name)
            .order_by(models.Student.id)
        )
        return self.session.exec(stmt).all()

    def count_by_department_name(self, name: str) -> int:
        stmt = (
            select(func.count(models.Student.id))
            .join(models.Department)
            .where(models.Department.name == name)
        )
        return self.session.exec(stmt).one()

    def save(self, student: models.Student) -> models.Student:
        """Insert or overwrite a student.

        A student carrying the unassigned id is inserted and receives a
        store-generated id. Any other id overwrites the row with that id
        (or inserts it under that id when missing).
        """
        if not student.id:
            student.id = None
            self.session.add(student)
            self.session.commit()
            self.session.refresh(student)
            return student
        existing = self.find_by_id(student.id)
        if existing is None:
            self.session.add(student)
            self.session.commit()
            self.session.refresh(student)
            return student
        existing.firstname = student.firstname
        existing.lastname = student.lastname
        existing.department_id = student.department_id
        self.session.add(existing)
        self.session.commit()
        self.session.refresh(existing)
        return existing

    def delete_by_id(self, student_id: int) -> None:
        """Delete the student with `student_id`; a missing row is a no-op."""
        student = self.find_by_id(student_id)
        if student is None:
            return
        self.session.delete(student)
        self.session.commit()
