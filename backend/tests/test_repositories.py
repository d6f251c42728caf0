from simple_api import models, repositories


def test_save_with_unassigned_id_assigns_fresh_id(session, department):
    repo = repositories.StudentRepository(session)
    first = repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Ann", lastname="Lee", department_id=department.id))
    second = repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Bob", lastname="Ray", department_id=department.id))
    assert first.id > 0
    assert second.id > first.id
    assert [s.id for s in repo.find_all()] == [first.id, second.id]


def test_save_with_existing_id_overwrites(session, department):
    repo = repositories.StudentRepository(session)
    saved = repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Ann", lastname="Lee", department_id=department.id))
    replaced = repo.save(models.Student(id=saved.id, firstname="Anna", lastname="Li", department_id=department.id))
    assert replaced.id == saved.id
    assert len(repo.find_all()) == 1
    fetched = repo.find_by_id(saved.id)
    assert (fetched.firstname, fetched.lastname) == ("Anna", "Li")
    assert fetched.department.name == "CS"


def test_delete_by_id(session, department):
    repo = repositories.StudentRepository(session)
    saved = repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Ann", lastname="Lee", department_id=department.id))
    repo.delete_by_id(saved.id)
    assert repo.find_by_id(saved.id) is None
    # missing rows are ignored
    repo.delete_by_id(saved.id)


def test_students_by_department_name(session, department):
    other = repositories.DepartmentRepository(session).save(models.Department(name="Math"))
    repo = repositories.StudentRepository(session)
    repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Ann", lastname="Lee", department_id=department.id))
    repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Bob", lastname="Ray", department_id=department.id))
    repo.save(models.Student(id=models.UNASSIGNED_ID, firstname="Cy", lastname="Ng", department_id=other.id))
    assert [s.firstname for s in repo.find_by_department_name("CS")] == ["Ann", "Bob"]
    assert repo.count_by_department_name("CS") == 2
    assert repo.count_by_department_name("Math") == 1
    assert repo.count_by_department_name("Physics") == 0


def test_department_lookups(session, department):
    repo = repositories.DepartmentRepository(session)
    assert repo.find_by_id(department.id).name == "CS"
    assert repo.find_by_id(999) is None
    assert repo.find_by_name("CS").id == department.id
    assert repo.find_by_name("cs") is None
    assert [d.name for d in repo.find_all()] == ["CS"]


def test_lookup_beyond_integer_range_is_absent(session, department):
    huge = models.MAX_ID + 1
    assert repositories.DepartmentRepository(session).find_by_id(huge) is None
    repo = repositories.StudentRepository(session)
    assert repo.find_by_id(huge) is None
    repo.delete_by_id(huge)
