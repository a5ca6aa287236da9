from datetime import timedelta

from app.models import Lesson, Topic
from app.services import topic_service

from conftest import BASE_TIME


class TestPublicTopics:
    def test_lists_only_published_topics_with_published_lesson_counts(
        self, client, make_topic, make_lesson
    ):
        python = make_topic(title="Python", slug="python")
        make_topic(title="Draft", slug="draft", is_published=False)
        make_lesson(python)
        make_lesson(python)
        make_lesson(python, is_published=False)

        response = client.get("/api/topics")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        topic = body["data"][0]
        assert topic["slug"] == "python"
        assert topic["lessonsCount"] == 2
        assert topic["isPublished"] is True
        assert "createdBy" not in topic

    def test_orders_by_order_then_newest_first(self, client, make_topic):
        make_topic(slug="late-order", order=1, created_at=BASE_TIME)
        make_topic(slug="older", order=0, created_at=BASE_TIME)
        make_topic(slug="newer", order=0, created_at=BASE_TIME + timedelta(days=1))

        slugs = [t["slug"] for t in client.get("/api/topics").json()["data"]]

        assert slugs == ["newer", "older", "late-order"]

    def test_get_by_slug_returns_published_lessons_without_content(
        self, client, make_topic, make_lesson
    ):
        topic = make_topic(slug="javascript")
        make_lesson(topic, slug="closures", order=2)
        make_lesson(topic, slug="variables", order=1)
        make_lesson(topic, slug="hidden", order=0, is_published=False)

        response = client.get("/api/topics/javascript")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["slug"] == "javascript"
        assert [lesson["slug"] for lesson in data["lessons"]] == ["variables", "closures"]
        for lesson in data["lessons"]:
            assert "content" not in lesson
            assert "createdBy" not in lesson

    def test_get_by_slug_hides_unpublished_topic(self, client, make_topic):
        make_topic(slug="secret", is_published=False)

        response = client.get("/api/topics/secret")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Topic not found"}


class TestAdminTopicReads:
    def test_lists_all_topics_with_author_and_total_counts(
        self, client, admin_headers, admin_user, make_topic, make_lesson
    ):
        topic = make_topic(slug="draft", is_published=False, created_by_id=admin_user.id)
        make_lesson(topic, is_published=False)

        response = client.get("/api/admin/topics", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["lessonsCount"] == 1
        assert data[0]["createdBy"] == {
            "id": admin_user.id,
            "name": "Admin",
            "email": "admin@learnify.test",
        }

    def test_get_by_id_includes_every_lesson(self, client, admin_headers, make_topic, make_lesson):
        topic = make_topic(is_published=False)
        make_lesson(topic, slug="b", order=1)
        make_lesson(topic, slug="a", order=0, is_published=False)

        response = client.get(f"/api/admin/topics/{topic.id}", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert [lesson["slug"] for lesson in data["lessons"]] == ["a", "b"]
        assert data["lessons"][0]["content"]

    def test_get_by_id_missing(self, client, admin_headers):
        response = client.get("/api/admin/topics/999", headers=admin_headers)
        assert response.status_code == 404


class TestCreateTopic:
    def test_creates_with_defaults_and_author(self, client, admin_headers, admin_user, fetch):
        response = client.post(
            "/api/admin/topics",
            json={"title": "  Rust  ", "slug": "Rust", "description": "Systems programming"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Topic created successfully"
        data = body["data"]
        assert data["title"] == "Rust"
        assert data["slug"] == "rust"
        assert data["icon"] == "📚"
        assert data["color"] == "#3b82f6"
        assert data["order"] == 0
        assert data["isPublished"] is True

        (stored,) = fetch(Topic, slug="rust")
        assert stored.created_by_id == admin_user.id

    def test_respects_explicit_unpublished_flag(self, client, admin_headers):
        response = client.post(
            "/api/admin/topics",
            json={
                "title": "Go",
                "slug": "go",
                "description": "Gophers",
                "isPublished": False,
                "order": 3,
                "icon": "🐹",
            },
            headers=admin_headers,
        )

        data = response.json()["data"]
        assert data["isPublished"] is False
        assert data["order"] == 3
        assert data["icon"] == "🐹"

    def test_requires_title_slug_and_description(self, client, admin_headers, fetch):
        response = client.post(
            "/api/admin/topics",
            json={"title": "No slug", "description": "   "},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide title, slug, and description"
        assert fetch(Topic) == []

    def test_rejects_duplicate_slug(self, client, admin_headers, make_topic, fetch):
        make_topic(slug="python")

        response = client.post(
            "/api/admin/topics",
            json={"title": "Python again", "slug": "PYTHON", "description": "dup"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Slug already exists. Please use a unique slug."
        assert len(fetch(Topic)) == 1

    def test_rejects_overlong_title(self, client, admin_headers, fetch):
        response = client.post(
            "/api/admin/topics",
            json={"title": "x" * 101, "slug": "long", "description": "d"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert fetch(Topic) == []


class TestUpdateTopic:
    def test_merges_fields_and_keeps_others(self, client, admin_headers, make_topic):
        topic = make_topic(slug="css", color="#ff0000", order=4)

        response = client.put(
            f"/api/admin/topics/{topic.id}",
            json={"title": "CSS Basics"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "CSS Basics"
        assert data["slug"] == "css"
        assert data["color"] == "#ff0000"
        assert data["order"] == 4

    def test_resending_own_slug_is_not_a_conflict(self, client, admin_headers, make_topic):
        topic = make_topic(slug="html")

        response = client.put(
            f"/api/admin/topics/{topic.id}",
            json={"slug": "html", "description": "Markup"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["description"] == "Markup"

    def test_rejects_slug_taken_by_another_topic(self, client, admin_headers, make_topic, fetch):
        make_topic(slug="taken")
        topic = make_topic(slug="mine")

        response = client.put(
            f"/api/admin/topics/{topic.id}",
            json={"slug": "taken"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        (stored,) = fetch(Topic, id=topic.id)
        assert stored.slug == "mine"

    def test_rejects_blanking_required_field(self, client, admin_headers, make_topic):
        topic = make_topic()

        response = client.put(
            f"/api/admin/topics/{topic.id}",
            json={"title": " "},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_missing_topic(self, client, admin_headers):
        response = client.put("/api/admin/topics/404", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404


class TestDeleteTopic:
    def test_refuses_while_lessons_exist(self, client, admin_headers, make_topic, make_lesson, fetch):
        topic = make_topic()
        make_lesson(topic)
        make_lesson(topic, is_published=False)

        response = client.delete(f"/api/admin/topics/{topic.id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Cannot delete topic. It has 2 lesson(s). Please delete lessons first."
        )
        assert len(fetch(Topic, id=topic.id)) == 1
        assert len(fetch(Lesson, topic_id=topic.id)) == 2

    def test_deletes_empty_topic(self, client, admin_headers, make_topic, fetch):
        topic = make_topic()

        response = client.delete(f"/api/admin/topics/{topic.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Topic deleted successfully",
            "data": {},
        }
        assert fetch(Topic, id=topic.id) == []

    def test_missing_topic(self, client, admin_headers):
        response = client.delete("/api/admin/topics/12345", headers=admin_headers)
        assert response.status_code == 404


class TestStoreLevelSlugConstraint:
    def test_duplicate_slug_caught_by_unique_index(self, client, admin_headers, make_topic, fetch, monkeypatch):
        make_topic(slug="python")
        monkeypatch.setattr(topic_service, "slug_taken", lambda *args, **kwargs: False)

        response = client.post(
            "/api/admin/topics",
            json={"title": "Python again", "slug": "python", "description": "dup"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Topic with this slug already exists"}
        assert len(fetch(Topic, slug="python")) == 1

        follow_up = client.post(
            "/api/admin/topics",
            json={"title": "Rust", "slug": "rust", "description": "ok"},
            headers=admin_headers,
        )
        assert follow_up.status_code == 201
