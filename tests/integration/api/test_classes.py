"""
Integration tests for class creation, listing, deletion, rosters, join codes and enrollment
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient

from archoops.app.services.join_code_allocator import is_valid_join_code
from tests.integration.helpers import bearer, signup


@pytest_asyncio.fixture
async def teacher(client: AsyncClient):
    return await signup(client, "teacher@example.com", role="teacher")


@pytest_asyncio.fixture
async def student(client: AsyncClient):
    return await signup(client, "student@example.com", role="student")


async def _create_class(client: AsyncClient, token: str, name: str = "Period 1") -> dict:
    response = await client.post("/classes", json={"name": name}, headers=bearer(token))
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_teacher_creates_classes_with_distinct_codes(client: AsyncClient, teacher):
    created = [await _create_class(client, teacher["access_token"], f"Period {i}") for i in range(5)]

    codes = [c["join_code"] for c in created]
    assert len(set(codes)) == 5
    assert all(is_valid_join_code(code) for code in codes)


@pytest.mark.asyncio
async def test_student_joins_with_lowercase_code(client: AsyncClient, teacher, student):
    class_room = await _create_class(client, teacher["access_token"])

    response = await client.post(
        "/classes/join",
        json={"code": class_room["join_code"].lower()},
        headers=bearer(student["access_token"]),
    )

    assert response.status_code == 201
    assert response.json()["id"] == class_room["id"]

    again = await client.post(
        "/classes/join",
        json={"code": class_room["join_code"]},
        headers=bearer(student["access_token"]),
    )
    assert again.status_code == 409
    assert again.json()["error"] == "ALREADY_ENROLLED"


@pytest.mark.asyncio
async def test_join_unknown_or_malformed_code(client: AsyncClient, student):
    unknown = await client.post(
        "/classes/join", json={"code": "ZZZZZZ"}, headers=bearer(student["access_token"])
    )
    malformed = await client.post(
        "/classes/join", json={"code": "ZZ-1"}, headers=bearer(student["access_token"])
    )

    assert unknown.status_code == 404
    assert unknown.json() == {"error": "CLASS_NOT_FOUND", "message": "Invalid join code"}
    assert malformed.status_code == 400
    assert malformed.json()["error"] == "INVALID_JOIN_CODE"


@pytest.mark.asyncio
async def test_rotate_code_retires_old_code(client: AsyncClient, teacher, student):
    class_room = await _create_class(client, teacher["access_token"])
    old_code = class_room["join_code"]

    response = await client.post(
        f"/classes/{class_room['id']}/rotate-code", headers=bearer(teacher["access_token"])
    )

    assert response.status_code == 200
    new_code = response.json()["join_code"]
    assert new_code != old_code
    assert is_valid_join_code(new_code)

    old = await client.post(
        "/classes/join", json={"code": old_code}, headers=bearer(student["access_token"])
    )
    new = await client.post(
        "/classes/join", json={"code": new_code}, headers=bearer(student["access_token"])
    )
    assert old.status_code == 404
    assert new.status_code == 201


@pytest.mark.asyncio
async def test_other_teacher_cannot_rotate(client: AsyncClient, teacher):
    class_room = await _create_class(client, teacher["access_token"])
    other = await signup(client, "other@example.com", role="teacher")

    response = await client.post(
        f"/classes/{class_room['id']}/rotate-code", headers=bearer(other["access_token"])
    )

    assert response.status_code == 404
    assert response.json()["error"] == "CLASS_NOT_FOUND"


@pytest.mark.asyncio
async def test_student_signup_with_class_code_enrolls(client: AsyncClient, teacher):
    class_room = await _create_class(client, teacher["access_token"])

    body = await signup(
        client, "newbie@example.com", role="student", class_join_code=class_room["join_code"]
    )

    again = await client.post(
        "/classes/join", json={"code": class_room["join_code"]}, headers=bearer(body["access_token"])
    )
    assert again.status_code == 409


async def _join(client: AsyncClient, token: str, code: str):
    return await client.post("/classes/join", json={"code": code}, headers=bearer(token))


@pytest.mark.asyncio
async def test_teacher_and_student_class_lists(client: AsyncClient, teacher, student):
    first = await _create_class(client, teacher["access_token"], "Period 1")
    second = await _create_class(client, teacher["access_token"], "Period 2")
    await _join(client, student["access_token"], first["join_code"])

    teacher_list = await client.get("/teacher/classes", headers=bearer(teacher["access_token"]))
    student_list = await client.get("/student/classes", headers=bearer(student["access_token"]))

    assert teacher_list.status_code == 200
    counts = {c["id"]: c["student_count"] for c in teacher_list.json()}
    assert counts == {first["id"]: 1, second["id"]: 0}

    assert student_list.status_code == 200
    assert [c["id"] for c in student_list.json()] == [first["id"]]


@pytest.mark.asyncio
async def test_class_lists_are_role_gated(client: AsyncClient, teacher, student):
    as_student = await client.get("/teacher/classes", headers=bearer(student["access_token"]))
    as_teacher = await client.get("/student/classes", headers=bearer(teacher["access_token"]))

    assert as_student.status_code == 403
    assert as_teacher.status_code == 403


@pytest.mark.asyncio
async def test_delete_class_retires_code_and_enrollments(client: AsyncClient, teacher, student):
    class_room = await _create_class(client, teacher["access_token"])
    await _join(client, student["access_token"], class_room["join_code"])

    response = await client.delete(
        f"/classes/{class_room['id']}", headers=bearer(teacher["access_token"])
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True}

    rejoin = await _join(client, student["access_token"], class_room["join_code"])
    assert rejoin.status_code == 404
    enrolled = await client.get("/student/classes", headers=bearer(student["access_token"]))
    assert enrolled.json() == []
    owned = await client.get("/teacher/classes", headers=bearer(teacher["access_token"]))
    assert owned.json() == []


@pytest.mark.asyncio
async def test_other_teacher_cannot_delete_or_view_roster(client: AsyncClient, teacher):
    class_room = await _create_class(client, teacher["access_token"])
    other = await signup(client, "other@example.com", role="teacher")

    delete = await client.delete(f"/classes/{class_room['id']}", headers=bearer(other["access_token"]))
    roster = await client.get(
        f"/classes/{class_room['id']}/roster", headers=bearer(other["access_token"])
    )

    assert delete.status_code == 404
    assert delete.json()["error"] == "CLASS_NOT_FOUND"
    assert roster.status_code == 404

    still_there = await client.get("/teacher/classes", headers=bearer(teacher["access_token"]))
    assert [c["id"] for c in still_there.json()] == [class_room["id"]]


@pytest.mark.asyncio
async def test_roster_lists_enrolled_students(client: AsyncClient, teacher, student):
    class_room = await _create_class(client, teacher["access_token"])
    await _join(client, student["access_token"], class_room["join_code"])

    response = await client.get(
        f"/classes/{class_room['id']}/roster", headers=bearer(teacher["access_token"])
    )

    assert response.status_code == 200
    body = response.json()
    assert body["join_code"] == class_room["join_code"]
    assert [(s["id"], s["email"]) for s in body["students"]] == [
        (student["user"]["id"], "student@example.com")
    ]


@pytest.mark.asyncio
async def test_student_leaves_class(client: AsyncClient, teacher, student):
    class_room = await _create_class(client, teacher["access_token"])
    await _join(client, student["access_token"], class_room["join_code"])
    url = f"/classes/{class_room['id']}/leave"

    first = await client.delete(url, headers=bearer(student["access_token"]))
    second = await client.delete(url, headers=bearer(student["access_token"]))

    assert first.status_code == 200
    assert second.status_code == 404
    assert second.json() == {"error": "NOT_ENROLLED", "message": "You are not enrolled in this class"}

    rejoin = await _join(client, student["access_token"], class_room["join_code"])
    assert rejoin.status_code == 201
