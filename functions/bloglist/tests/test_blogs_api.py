import unittest
from unittest.mock import patch

from bloglist.config import Settings
from bloglist.db import InMemoryDbClient
from bloglist.security import create_access_token
from blog_test_helper import (
    INITIAL_BLOGS,
    NEW_BLOG,
    auth_header,
    create_user,
    make_client,
    seed_blogs,
)


class BlogListTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.client = make_client(self.db)
        self.user = create_user(self.db)
        seed_blogs(self.db, self.user)

    def test_blogs_are_returned_as_json(self):
        response = self.client.get("/api/blogs")
        self.assertEqual(response.status_code, 200)
        self.assertIn("application/json", response.headers["content-type"])
        self.assertEqual(len(response.json()), len(INITIAL_BLOGS))

    def test_blogs_have_id_and_populated_user(self):
        blogs = self.client.get("/api/blogs").json()
        self.assertTrue(all(blog["id"] for blog in blogs))
        self.assertEqual(
            blogs[0]["user"],
            {"id": self.user.user_id, "username": "root", "name": "Superuser"},
        )

    def test_blog_without_known_owner_has_null_user(self):
        orphan = self.db.create_blog(
            title="Orphan", url="http://orphan.test", user_id="gone-user-id"
        )
        blogs = self.client.get("/api/blogs").json()
        listed = [blog for blog in blogs if blog["id"] == orphan.blog_id]
        self.assertEqual(len(listed), 1)
        self.assertIsNone(listed[0]["user"])

    def test_get_single_blog(self):
        blog = self.db.list_blogs()[0]
        response = self.client.get(f"/api/blogs/{blog.blog_id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], blog.title)

    def test_get_unknown_blog_is_not_found(self):
        response = self.client.get("/api/blogs/doesnotexist")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "blog not found")

    def test_add_a_new_blog(self):
        response = self.client.post(
            "/api/blogs", json=NEW_BLOG, headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 201)
        self.assertIn("application/json", response.headers["content-type"])

        blogs = self.db.list_blogs()
        self.assertEqual(len(blogs), len(INITIAL_BLOGS) + 1)
        self.assertIn(NEW_BLOG["title"], [b.title for b in blogs])
        self.assertIn(response.json()["id"], self.db.get_user(self.user.user_id).blog_ids)

    def test_missing_likes_defaults_to_zero(self):
        response = self.client.post(
            "/api/blogs", json=NEW_BLOG, headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["likes"], 0)
        added = [b for b in self.db.list_blogs() if b.title == NEW_BLOG["title"]]
        self.assertEqual(added[0].likes, 0)

    def test_missing_title_or_url_is_bad_request(self):
        response = self.client.post(
            "/api/blogs", json={"likes": 2}, headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("application/json", response.headers["content-type"])
        self.assertIn("error", response.json())
        self.assertEqual(len(self.db.list_blogs()), len(INITIAL_BLOGS))

    def test_negative_likes_is_bad_request(self):
        payload = dict(NEW_BLOG, likes=-1)
        response = self.client.post(
            "/api/blogs", json=payload, headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 400)

    def test_add_blog_without_token_fails(self):
        response = self.client.post("/api/blogs", json=NEW_BLOG)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "token missing")
        self.assertEqual(len(self.db.list_blogs()), len(INITIAL_BLOGS))

    def test_add_blog_with_garbage_token_fails(self):
        response = self.client.post(
            "/api/blogs",
            json=NEW_BLOG,
            headers={"Authorization": "Bearer not-a-token"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "token invalid")

    def test_add_blog_with_expired_token_fails(self):
        with patch("bloglist.security.get_settings") as mock_settings:
            mock_settings.return_value = Settings(token_ttl_seconds=-10)
            token = create_access_token(self.user.username, self.user.user_id)
        response = self.client.post(
            "/api/blogs",
            json=NEW_BLOG,
            headers={"Authorization": f"Bearer {token}"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "token expired")
        self.assertEqual(len(self.db.list_blogs()), len(INITIAL_BLOGS))

    def test_token_for_removed_user_fails(self):
        token = create_access_token("ghost", "missing-user-id")
        response = self.client.post(
            "/api/blogs",
            json=NEW_BLOG,
            headers={"Authorization": f"Bearer {token}"},
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "user not found")


class BlogChangeTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.client = make_client(self.db)
        self.user = create_user(self.db)
        seed_blogs(self.db, self.user)

    def test_delete_blog(self):
        blog = self.db.list_blogs()[0]
        response = self.client.delete(
            f"/api/blogs/{blog.blog_id}", headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 204)

        remaining = self.db.list_blogs()
        self.assertEqual(len(remaining), len(INITIAL_BLOGS) - 1)
        self.assertNotIn(blog.title, [b.title for b in remaining])
        self.assertNotIn(blog.blog_id, self.db.get_user(self.user.user_id).blog_ids)

    def test_delete_unknown_blog_is_bad_request(self):
        response = self.client.delete(
            "/api/blogs/doesnotexist", headers=auth_header(self.user)
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "bad request")

    def test_delete_someone_elses_blog_is_unauthorized(self):
        other = create_user(self.db, username="mluukkai", name="Matti")
        blog = self.db.list_blogs()[0]
        response = self.client.delete(
            f"/api/blogs/{blog.blog_id}", headers=auth_header(other)
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "unauthorized user")
        self.assertEqual(len(self.db.list_blogs()), len(INITIAL_BLOGS))

    def test_update_likes(self):
        blog = self.db.list_blogs()[0]
        response = self.client.put(
            f"/api/blogs/{blog.blog_id}",
            json={
                "author": blog.author,
                "title": blog.title,
                "url": blog.url,
                "likes": blog.likes + 1,
            },
        )
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.db.get_blog(blog.blog_id).likes, INITIAL_BLOGS[0]["likes"] + 1)

    def test_partial_update_keeps_other_fields(self):
        blog = self.db.list_blogs()[1]
        response = self.client.put(
            f"/api/blogs/{blog.blog_id}", json={"likes": 42}
        )
        self.assertEqual(response.status_code, 204)
        updated = self.db.get_blog(blog.blog_id)
        self.assertEqual(updated.likes, 42)
        self.assertEqual(updated.title, INITIAL_BLOGS[1]["title"])

    def test_update_with_empty_title_is_bad_request(self):
        blog = self.db.list_blogs()[0]
        response = self.client.put(
            f"/api/blogs/{blog.blog_id}", json={"title": ""}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.db.get_blog(blog.blog_id).title, INITIAL_BLOGS[0]["title"])

    def test_update_unknown_blog_is_not_found(self):
        response = self.client.put("/api/blogs/doesnotexist", json={"likes": 1})
        self.assertEqual(response.status_code, 404)


class BlogStatsTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.client = make_client(self.db)

    def test_stats_without_blogs(self):
        response = self.client.get("/api/blogs/stats")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "total_likes": 0,
                "favorite_blog": None,
                "most_blogs": None,
                "most_likes": None,
            },
        )

    def test_stats_over_stored_blogs(self):
        seed_blogs(self.db, create_user(self.db))
        stats = self.client.get("/api/blogs/stats").json()
        self.assertEqual(stats["total_likes"], 36)
        self.assertEqual(
            stats["favorite_blog"],
            {
                "title": "Canonical string reduction",
                "author": "Edsger W. Dijkstra",
                "likes": 12,
            },
        )
        self.assertEqual(
            stats["most_blogs"], {"author": "Robert C. Martin", "blogs": 3}
        )
        self.assertEqual(
            stats["most_likes"], {"author": "Edsger W. Dijkstra", "likes": 17}
        )


class UnknownEndpointTests(unittest.TestCase):
    def test_unknown_endpoint(self):
        client = make_client(InMemoryDbClient())
        response = client.get("/api/nothing-here")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "unknown endpoint"})


if __name__ == "__main__":
    unittest.main()
