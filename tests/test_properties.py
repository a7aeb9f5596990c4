"""Property listing and bookmark API tests."""

import uuid

from sqlalchemy import func, select

from feedbackhub.shared.db.models import Bookmark

from support import ApiTestCase, auth


class PropertyTests(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_token, _ = self.register_admin(email="boss@acme.com", company_name="Acme")
        self.other_token, _ = self.register_admin(email="rival@two.com", company_name="Two")
        self.employee_token, _ = self.provision_employee(self.admin_token)

    def _create(self, token=None, title="Harbor loft"):
        response = self.client.post(
            "/api/properties",
            json={"title": title, "address": "1 Dock St", "city": "Port", "price": 250000},
            headers=auth(token or self.admin_token),
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_and_visibility(self) -> None:
        mine = self._create()
        self._create(token=self.other_token, title="Rival house")

        admin_view = self.client.get("/api/properties", headers=auth(self.admin_token)).json()
        employee_view = self.client.get("/api/properties", headers=auth(self.employee_token)).json()
        self.assertEqual([p["title"] for p in admin_view], ["Harbor loft"])
        self.assertEqual([p["title"] for p in employee_view], ["Harbor loft"])
        self.assertEqual(mine["status"], "available")

        self.assertEqual(
            self.client.get(f"/api/properties/{mine['id']}", headers=auth(self.other_token)).status_code, 403
        )

    def test_employee_cannot_create(self) -> None:
        response = self.client.post(
            "/api/properties", json={"title": "x", "address": "y"}, headers=auth(self.employee_token)
        )

        self.assertEqual(response.status_code, 403)

    def test_update_and_delete_are_owner_only(self) -> None:
        prop = self._create()

        forbidden = self.client.put(
            f"/api/properties/{prop['id']}", json={"status": "sold"}, headers=auth(self.other_token)
        )
        self.assertEqual(forbidden.status_code, 403)

        updated = self.client.put(
            f"/api/properties/{prop['id']}", json={"status": "sold", "price": 200000}, headers=auth(self.admin_token)
        )
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["status"], "sold")
        self.assertEqual(updated.json()["title"], "Harbor loft")

        self.assertEqual(
            self.client.delete(f"/api/properties/{prop['id']}", headers=auth(self.other_token)).status_code, 403
        )
        self.assertEqual(
            self.client.delete(f"/api/properties/{prop['id']}", headers=auth(self.admin_token)).status_code, 200
        )
        self.assertEqual(
            self.client.get(f"/api/properties/{prop['id']}", headers=auth(self.admin_token)).status_code, 404
        )

    def test_malformed_id_is_404(self) -> None:
        response = self.client.get("/api/properties/not-a-uuid", headers=auth(self.admin_token))

        self.assertEqual(response.status_code, 404)


class BookmarkTests(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_token, _ = self.register_admin(email="boss@acme.com", company_name="Acme")
        self.other_token, _ = self.register_admin(email="rival@two.com", company_name="Two")
        self.employee_token, self.employee = self.provision_employee(self.admin_token)
        self.prop = self.client.post(
            "/api/properties",
            json={"title": "Harbor loft", "address": "1 Dock St"},
            headers=auth(self.admin_token),
        ).json()

    def test_bookmark_lifecycle(self) -> None:
        created = self.client.post(
            "/api/bookmarks", json={"propertyId": self.prop["id"], "note": "call owner"}, headers=auth(self.employee_token)
        )
        self.assertEqual(created.status_code, 201)
        bookmark = created.json()
        self.assertEqual(bookmark["property"]["title"], "Harbor loft")

        duplicate = self.client.post(
            "/api/bookmarks", json={"propertyId": self.prop["id"]}, headers=auth(self.employee_token)
        )
        self.assertEqual(duplicate.status_code, 400)

        listing = self.client.get("/api/bookmarks", headers=auth(self.employee_token)).json()
        self.assertEqual([b["id"] for b in listing], [bookmark["id"]])
        # Bookmarks belong to one principal
        self.assertEqual(self.client.get("/api/bookmarks", headers=auth(self.admin_token)).json(), [])

        self.assertEqual(
            self.client.delete(f"/api/bookmarks/{bookmark['id']}", headers=auth(self.admin_token)).status_code, 403
        )
        self.assertEqual(
            self.client.delete(f"/api/bookmarks/{bookmark['id']}", headers=auth(self.employee_token)).status_code, 200
        )
        self.assertEqual(self.client.get("/api/bookmarks", headers=auth(self.employee_token)).json(), [])

    def test_cannot_bookmark_invisible_or_missing_property(self) -> None:
        hidden = self.client.post(
            "/api/bookmarks", json={"propertyId": self.prop["id"]}, headers=auth(self.other_token)
        )
        missing = self.client.post(
            "/api/bookmarks", json={"propertyId": str(uuid.uuid4())}, headers=auth(self.employee_token)
        )

        self.assertEqual(hidden.status_code, 403)
        self.assertEqual(missing.status_code, 404)

    def test_deleting_employee_removes_their_bookmarks(self) -> None:
        self.client.post("/api/bookmarks", json={"propertyId": self.prop["id"]}, headers=auth(self.employee_token))
        self.client.post("/api/bookmarks", json={"propertyId": self.prop["id"]}, headers=auth(self.admin_token))

        deleted = self.client.delete(f"/api/employees/{self.employee['id']}", headers=auth(self.admin_token))
        self.assertEqual(deleted.status_code, 200)

        async def count_bookmarks(session):
            return (await session.execute(select(func.count()).select_from(Bookmark))).scalar_one()

        # Only the administrator's own bookmark is left
        self.assertEqual(self.run_in_session(count_bookmarks), 1)
        self.assertEqual(len(self.client.get("/api/bookmarks", headers=auth(self.admin_token)).json()), 1)
