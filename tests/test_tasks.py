"""Task API tests."""

from datetime import UTC, datetime, timedelta

from conftest import API


def create_task(client, headers, **fields):
    response = client.post(f"{API}/tasks", headers=headers, json=fields)
    assert response.status_code == 201
    return response.json()["data"]


def create_category(client, headers, name):
    response = client.post(f"{API}/categories", headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


def test_create_task_defaults(client, auth_headers):
    """Test creating a task with only a title."""
    response = client.post(f"{API}/tasks", headers=auth_headers, json={"title": "Write spec"})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Task created successfully"
    data = body["data"]
    assert data["title"] == "Write spec"
    assert data["status"] == "pending"
    assert data["priority"] == "medium"
    assert data["description"] is None
    assert data["due_date"] is None
    assert data["category_id"] is None
    assert data["category_name"] is None
    assert data["user_id"] == auth_headers.user_id


def test_create_task_with_all_fields(client, auth_headers):
    """Test creating a task with every field set."""
    category = create_category(client, auth_headers, "Work")

    data = create_task(
        client,
        auth_headers,
        title="Ship release",
        description="Tag and publish",
        status="in_progress",
        priority="urgent",
        due_date="2030-01-15T09:30:00Z",
        category_id=category["id"],
    )
    assert data["description"] == "Tag and publish"
    assert data["status"] == "in_progress"
    assert data["priority"] == "urgent"
    assert data["due_date"].startswith("2030-01-15T09:30:00")
    assert data["category_id"] == category["id"]
    assert data["category_name"] == "Work"


def test_create_task_requires_title(client, auth_headers):
    """Test that a missing or empty title is rejected."""
    missing = client.post(f"{API}/tasks", headers=auth_headers, json={"description": "x"})
    assert missing.status_code == 400
    assert missing.json()["success"] is False
    assert "title" in missing.json()["message"]

    empty = client.post(f"{API}/tasks", headers=auth_headers, json={"title": ""})
    assert empty.status_code == 400


def test_create_task_rejects_unknown_status(client, auth_headers):
    """Test that status must be one of the known values."""
    response = client.post(
        f"{API}/tasks", headers=auth_headers, json={"title": "Task", "status": "done"}
    )
    assert response.status_code == 400
    assert "status" in response.json()["message"]


def test_create_task_with_missing_category(client, auth_headers):
    """Test that a nonexistent category is rejected."""
    response = client.post(
        f"{API}/tasks", headers=auth_headers, json={"title": "Task", "category_id": 9999}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Category not found or does not belong to you"


def test_create_task_with_other_users_category(client, auth_headers, other_auth_headers):
    """Test that a task cannot be filed under another user's category."""
    foreign = create_category(client, other_auth_headers, "Theirs")

    response = client.post(
        f"{API}/tasks",
        headers=auth_headers,
        json={"title": "Sneaky", "category_id": foreign["id"]},
    )
    assert response.status_code == 400
    assert client.get(f"{API}/tasks", headers=auth_headers).json()["count"] == 0


def test_get_tasks_newest_first(client, auth_headers, other_auth_headers):
    """Test listing tasks returns only the caller's, newest first."""
    first = create_task(client, auth_headers, title="First")
    second = create_task(client, auth_headers, title="Second")
    third = create_task(client, auth_headers, title="Third")
    create_task(client, other_auth_headers, title="Not mine")

    response = client.get(f"{API}/tasks", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert [t["id"] for t in body["data"]] == [third["id"], second["id"], first["id"]]


def test_get_tasks_with_filters(client, auth_headers):
    """Test filtering tasks by status, priority and category."""
    work = create_category(client, auth_headers, "Work")
    create_task(client, auth_headers, title="A", status="completed", priority="high")
    create_task(client, auth_headers, title="B", status="pending", priority="high")
    create_task(
        client, auth_headers, title="C", status="pending", priority="low", category_id=work["id"]
    )

    by_status = client.get(f"{API}/tasks", headers=auth_headers, params={"status": "pending"})
    assert {t["title"] for t in by_status.json()["data"]} == {"B", "C"}

    by_both = client.get(
        f"{API}/tasks",
        headers=auth_headers,
        params={"status": "pending", "priority": "high"},
    )
    assert [t["title"] for t in by_both.json()["data"]] == ["B"]

    by_category = client.get(
        f"{API}/tasks", headers=auth_headers, params={"category_id": work["id"]}
    )
    assert by_category.json()["count"] == 1
    assert by_category.json()["data"][0]["category_name"] == "Work"


def test_get_tasks_with_invalid_filter(client, auth_headers):
    """Test that an unknown status filter is rejected."""
    response = client.get(f"{API}/tasks", headers=auth_headers, params={"status": "bogus"})
    assert response.status_code == 400


def test_get_task(client, auth_headers):
    """Test fetching a single task."""
    task = create_task(client, auth_headers, title="Read")

    response = client.get(f"{API}/tasks/{task['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == task


def test_get_missing_task(client, auth_headers):
    """Test fetching a task that does not exist."""
    response = client.get(f"{API}/tasks/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Task not found"}


def test_update_task_status_only(client, auth_headers):
    """Test that a partial update leaves every other field unchanged."""
    category = create_category(client, auth_headers, "Work")
    task = create_task(
        client,
        auth_headers,
        title="Review PR",
        description="Check the tests",
        priority="high",
        due_date="2030-03-01T12:00:00Z",
        category_id=category["id"],
    )

    response = client.put(
        f"{API}/tasks/{task['id']}", headers=auth_headers, json={"status": "completed"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task updated successfully"
    updated = body["data"]
    assert updated["status"] == "completed"
    for field in ("title", "description", "priority", "due_date", "category_id", "category_name"):
        assert updated[field] == task[field]


def test_update_task_clears_nullable_fields(client, auth_headers):
    """Test that explicit nulls clear description, due date and category."""
    category = create_category(client, auth_headers, "Work")
    task = create_task(
        client,
        auth_headers,
        title="Plan",
        description="Draft",
        due_date="2030-03-01T12:00:00Z",
        category_id=category["id"],
    )

    response = client.put(
        f"{API}/tasks/{task['id']}",
        headers=auth_headers,
        json={"description": None, "due_date": None, "category_id": None},
    )
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["description"] is None
    assert updated["due_date"] is None
    assert updated["category_id"] is None
    assert updated["title"] == "Plan"


def test_update_task_rejects_null_title(client, auth_headers):
    """Test that required fields cannot be cleared."""
    task = create_task(client, auth_headers, title="Keep")

    response = client.put(f"{API}/tasks/{task['id']}", headers=auth_headers, json={"title": None})
    assert response.status_code == 400


def test_update_task_moves_category(client, auth_headers):
    """Test re-filing a task under another category."""
    work = create_category(client, auth_headers, "Work")
    home = create_category(client, auth_headers, "Home")
    task = create_task(client, auth_headers, title="Fix sink", category_id=work["id"])

    response = client.put(
        f"{API}/tasks/{task['id']}", headers=auth_headers, json={"category_id": home["id"]}
    )
    assert response.status_code == 200
    assert response.json()["data"]["category_name"] == "Home"


def test_update_task_with_other_users_category(client, auth_headers, other_auth_headers):
    """Test that a task cannot be moved into another user's category."""
    foreign = create_category(client, other_auth_headers, "Theirs")
    task = create_task(client, auth_headers, title="Mine")

    response = client.put(
        f"{API}/tasks/{task['id']}", headers=auth_headers, json={"category_id": foreign["id"]}
    )
    assert response.status_code == 400

    unchanged = client.get(f"{API}/tasks/{task['id']}", headers=auth_headers).json()["data"]
    assert unchanged["category_id"] is None


def test_update_task_with_empty_body(client, auth_headers):
    """Test that an empty update returns the task unchanged."""
    task = create_task(client, auth_headers, title="Same")

    response = client.put(f"{API}/tasks/{task['id']}", headers=auth_headers, json={})
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Same"


def test_update_missing_task(client, auth_headers):
    """Test updating a task that does not exist."""
    response = client.put(f"{API}/tasks/9999", headers=auth_headers, json={"title": "x"})
    assert response.status_code == 404


def test_delete_task(client, auth_headers):
    """Test deleting a task."""
    task = create_task(client, auth_headers, title="Temporary")

    response = client.delete(f"{API}/tasks/{task['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Task deleted successfully"

    assert client.get(f"{API}/tasks/{task['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"{API}/tasks/{task['id']}", headers=auth_headers).status_code == 404


def test_task_isolation_between_users(client, auth_headers, other_auth_headers):
    """Test that another user's task looks like it does not exist."""
    task = create_task(client, auth_headers, title="Private")
    url = f"{API}/tasks/{task['id']}"

    assert client.get(url, headers=other_auth_headers).status_code == 404
    assert client.put(url, headers=other_auth_headers, json={"title": "Mine"}).status_code == 404
    assert client.delete(url, headers=other_auth_headers).status_code == 404

    response = client.get(url, headers=auth_headers)
    assert response.json()["data"]["title"] == "Private"


def test_get_tasks_by_category(client, auth_headers):
    """Test listing the tasks in one category."""
    work = create_category(client, auth_headers, "Work")
    home = create_category(client, auth_headers, "Home")
    older = create_task(client, auth_headers, title="Email", category_id=work["id"])
    newer = create_task(client, auth_headers, title="Meeting", category_id=work["id"])
    create_task(client, auth_headers, title="Laundry", category_id=home["id"])

    response = client.get(f"{API}/tasks/category/{work['id']}", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [t["id"] for t in body["data"]] == [newer["id"], older["id"]]


def test_get_tasks_by_other_users_category(client, auth_headers, other_auth_headers):
    """Test that listing by a category the caller does not own is 404."""
    foreign = create_category(client, other_auth_headers, "Theirs")

    response = client.get(f"{API}/tasks/category/{foreign['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"


def test_statistics_scenario(client, auth_headers):
    """Test statistics after filing one new task under a category."""
    work = create_category(client, auth_headers, "Work")
    create_task(client, auth_headers, title="Write spec", category_id=work["id"])

    response = client.get(f"{API}/tasks/statistics", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "total": 1,
            "pending": 1,
            "in_progress": 0,
            "completed": 0,
            "cancelled": 0,
            "high_priority": 0,
            "due_soon": 0,
            "overdue": 0,
        },
    }


def test_statistics_counts(client, auth_headers, other_auth_headers):
    """Test every statistic against a mixed set of tasks."""
    now = datetime.now(UTC)

    def in_hours(hours):
        return (now + timedelta(hours=hours)).isoformat()

    create_task(client, auth_headers, title="Soon", due_date=in_hours(24), priority="high")
    create_task(client, auth_headers, title="Later", due_date=in_hours(72), priority="urgent")
    create_task(client, auth_headers, title="Done", status="completed", due_date=in_hours(1))
    create_task(client, auth_headers, title="Late", status="in_progress", due_date=in_hours(-5))
    create_task(client, auth_headers, title="Dropped", status="cancelled", priority="low")
    create_task(client, other_auth_headers, title="Not mine", due_date=in_hours(2))

    stats = client.get(f"{API}/tasks/statistics", headers=auth_headers).json()["data"]
    assert stats == {
        "total": 5,
        "pending": 2,
        "in_progress": 1,
        "completed": 1,
        "cancelled": 1,
        "high_priority": 2,
        "due_soon": 1,
        "overdue": 1,
    }


def test_statistics_for_user_without_tasks(client, auth_headers):
    """Test that statistics are all zero for a new user."""
    stats = client.get(f"{API}/tasks/statistics", headers=auth_headers).json()["data"]
    assert stats["total"] == 0
    assert all(value == 0 for value in stats.values())
