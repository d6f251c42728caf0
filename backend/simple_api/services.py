"""Business logic services used by HTTP controllers.

Services are intentionally thin: they validate inputs, resolve
references between departments and students and persist aggregates via
the repositories handed to their constructors. Invalid input raises
`InvalidArgumentError` before the store is touched and is logged as a
warning. A department looked up by id raises `NotFoundError` when it
does not exist; writes report that as an invalid reference. Other read
paths report absence as `None`.
"""

import logging
from typing import List, Optional
from . import models, repositories

logger = logging.getLogger("simple_api.services")


class InvalidArgumentError(ValueError):
    """Raised for missing or malformed input (null/negative id, empty name)."""


class NotFoundError(LookupError):
    """Raised when a referenced entity does not exist."""


def _rejected(message: str) -> InvalidArgumentError:
    logger.warning("input_rejected %s", message)
    return InvalidArgumentError(message)


class DepartmentService:
    """Department lookups shared by the student service and controllers."""
    def __init__(self, department_repo: repositories.DepartmentRepository):
        self.department_repo = department_repo

    def get_department_by_id(self, department_id: Optional[int]) -> models.Department:
        """Return the department with `department_id`.

        Raises `InvalidArgumentError` for a missing or negative id and
        `NotFoundError` when no department has that id.
        """
        if department_id is None or department_id < 0:
            raise _rejected(f"invalid department id: {department_id}")
        department = self.department_repo.find_by_id(department_id)
        if department is None:
            raise NotFoundError(f"department not found: {department_id}")
        return department

    def get_department_by_name(self, name: Optional[str]) -> Optional[models.Department]:
        """Return the department named exactly `name`, or `None`."""
        if not name:
            raise _rejected("department name must not be empty")
        return self.department_repo.find_by_name(name)

    def get_departments(self) -> List[models.Department]:
        return self.department_repo.find_all()


class StudentService:
    """CRUD operations on students, validating department references."""
    def __init__(self, student_repo: repositories.StudentRepository, department_service: DepartmentService):
        self.student_repo = student_repo
        self.department_service = department_service

    def get_all(self) -> List[models.Student]:
        return self.student_repo.find_all()

    def get_student_by_id(self, student_id: int) -> Optional[models.Student]:
        """Return the student or `None` if it does not exist."""
        self._validate_student_id(student_id)
        return self.student_repo.find_by_id(student_id)

    def add_student(self, student: models.Student) -> models.Student:
        """Validate and persist `student`.

        The student must carry a non-empty lastname and a department
        reference that resolves through the department service; anything
        else raises `InvalidArgumentError`. A student with the unassigned
        id is inserted; otherwise the record with the same id is replaced.
        """
        if not student.lastname:
            raise _rejected("student lastname must not be empty")
        try:
            self.department_service.get_department_by_id(student.department_id)
        except NotFoundError as e:
            raise _rejected(str(e)) from e
        saved = self.student_repo.save(student)
        logger.info("student_saved id=%s department_id=%s", saved.id, saved.department_id)
        return saved

    def remove_student_by_id(self, student_id: int) -> None:
        self._validate_student_id(student_id)
        self.student_repo.delete_by_id(student_id)
        logger.info("student_removed id=%s", student_id)

    def get_students_by_department_name(self, name: str) -> Optional[List[models.Student]]:
        """Return the students of department `name`, or `None` if unknown."""
        if self.department_service.get_department_by_name(name) is None:
            return None
        return self.student_repo.find_by_department_name(name)

    def get_students_number_by_department_name(self, name: str) -> Optional[int]:
        """Return how many students department `name` has, or `None` if unknown."""
        if self.department_service.get_department_by_name(name) is None:
            return None
        return self.student_repo.count_by_department_name(name)

    @staticmethod
    def _validate_student_id(student_id: Optional[int]) -> None:
        if student_id is None or student_id < 0:
            raise _rejected(f"invalid student id: {student_id}")
