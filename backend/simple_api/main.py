"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the Student/Department
backend. Controllers are intentionally thin: they map payloads to
entities, delegate to services, and translate outcomes to status codes.

Endpoints implemented:
- GET /students/
- GET /students/{id}
- POST /students
- PUT /students/{id}
- DELETE /students/{id}
- GET /departments/
- GET /departments/{name}
- GET /departments/{name}/students
- GET /departments/{name}/count
- GET /health
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from . import services, repositories, models
from .schemas import StudentDto, StudentOut, DepartmentOut
from .config import settings

app = FastAPI(title="Simple Student API")
logger = logging.getLogger("simple_api.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local frontends working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


def _request_log_line(request: Request, req_id: str, started: float, status_code=None) -> str:
    """JSON summary of one request for the `request_done`/`request_failed` lines."""
    fields = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client": request.client.host if request.client else "unknown",
    }
    if status_code is not None:
        fields["status_code"] = status_code
    return json.dumps(fields, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Tag every response with `X-Request-ID` and log its outcome."""
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_failed %s", _request_log_line(request, req_id, started))
        raise
    response.headers["X-Request-ID"] = req_id
    logger.info("request_done %s", _request_log_line(request, req_id, started, response.status_code))
    return response


def get_department_service(db: Session = Depends(get_session)) -> services.DepartmentService:
    return services.DepartmentService(repositories.DepartmentRepository(db))


def get_student_service(db: Session = Depends(get_session)) -> services.StudentService:
    department_service = services.DepartmentService(repositories.DepartmentRepository(db))
    return services.StudentService(repositories.StudentRepository(db), department_service)


def student_dto_to_student(dto: StudentDto, department_service: services.DepartmentService) -> models.Student:
    """Build a `Student` entity from an input payload.

    The entity gets the unassigned id; the caller re-sets the id for
    updates. Raises the department service errors for a bad reference.
    """
    department = department_service.get_department_by_id(dto.department_id)
    return models.Student(
        id=models.UNASSIGNED_ID,
        firstname=dto.firstname,
        lastname=dto.lastname,
        department_id=department.id,
    )


def _student_to_response(student: models.Student) -> StudentOut:
    return StudentOut.model_validate(student)


def _get_existing_student(svc: services.StudentService, student_id: int) -> models.Student:
    try:
        student = svc.get_student_by_id(student_id)
    except services.InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if student is None:
        raise HTTPException(status_code=404, detail='student not found')
    return student


@app.get('/students/')
def list_students(svc: services.StudentService = Depends(get_student_service)):
    """List every student with its department."""
    return [_student_to_response(s) for s in svc.get_all()]


@app.get('/students/{student_id}')
def get_student_by_id(student_id: int, svc: services.StudentService = Depends(get_student_service)):
    """Return one student, or 404 when the id is unknown."""
    return _student_to_response(_get_existing_student(svc, student_id))


@app.post('/students', status_code=201)
def add_student(
    payload: StudentDto,
    request: Request,
    svc: services.StudentService = Depends(get_student_service),
):
    """Create a student and point `Location` at the new resource.

    An unknown or invalid department reference yields 400.
    """
    try:
        student = student_dto_to_student(payload, svc.department_service)
        saved = svc.add_student(student)
    except (services.InvalidArgumentError, services.NotFoundError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    location = f"{request.url.path.rstrip('/')}/{saved.id}"
    return Response(status_code=201, headers={"Location": location})


@app.put('/students/{student_id}')
def update_student(
    student_id: int,
    payload: StudentDto,
    svc: services.StudentService = Depends(get_student_service),
):
    """Replace every field of an existing student.

    Returns 404 when the student does not exist before the update.
    """
    _get_existing_student(svc, student_id)
    try:
        student = student_dto_to_student(payload, svc.department_service)
        student.id = student_id
        saved = svc.add_student(student)
    except (services.InvalidArgumentError, services.NotFoundError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _student_to_response(saved)


@app.delete('/students/{student_id}')
def remove_student(student_id: int, svc: services.StudentService = Depends(get_student_service)):
    """Delete a student; 404 (and no deletion) when it does not exist."""
    _get_existing_student(svc, student_id)
    svc.remove_student_by_id(student_id)
    return Response(status_code=200)


@app.get('/departments/')
def list_departments(svc: services.DepartmentService = Depends(get_department_service)):
    return [DepartmentOut.model_validate(d) for d in svc.get_departments()]


@app.get('/departments/{name}')
def get_department_by_name(name: str, svc: services.DepartmentService = Depends(get_department_service)):
    """Return the department matching `name` exactly."""
    department = svc.get_department_by_name(name)
    if department is None:
        raise HTTPException(status_code=404, detail='department not found')
    return DepartmentOut.model_validate(department)


@app.get('/departments/{name}/students')
def get_department_students(name: str, svc: services.StudentService = Depends(get_student_service)):
    """List the students of department `name`."""
    students = svc.get_students_by_department_name(name)
    if students is None:
        raise HTTPException(status_code=404, detail='department not found')
    return [_student_to_response(s) for s in students]


@app.get('/departments/{name}/count')
def count_department_students(name: str, svc: services.StudentService = Depends(get_student_service)):
    """Return the number of students in department `name`."""
    count = svc.get_students_number_by_department_name(name)
    if count is None:
        raise HTTPException(status_code=404, detail='department not found')
    return count


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
