import unittest

from tests.helpers import ApiTestCase


class ClientApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.mine = self.make_client("Asha Rao", self.agent)
        self.theirs = self.make_client("Vikram Das", self.other_agent)
        self.unassigned = self.make_client("Meera Nair", None)

    def test_admin_sees_every_client(self):
        response = self.client.get("/api/clients", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        names = {c["name"] for c in response.json()}
        self.assertEqual(names, {"Asha Rao", "Vikram Das", "Meera Nair"})

    def test_agent_sees_only_assigned_clients(self):
        response = self.client.get("/api/clients", headers=self.auth(self.agent))
        body = response.json()
        self.assertEqual([c["name"] for c in body], ["Asha Rao"])
        self.assertEqual(body[0]["assignedAgent"]["email"], "priya@solarflow.com")
        self.assertEqual(body[0]["projectStatus"], "lead")

    def test_unassigned_client_has_no_agent(self):
        response = self.client.get(f"/api/clients/{self.unassigned.id}", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["assignedAgent"])

    def test_client_detail_includes_approvals_and_tasks(self):
        self.make_approval(self.mine.id, "application", "approved")
        self.make_task(self.mine.id, self.agent.id, title="Site survey")

        response = self.client.get(f"/api/clients/{self.mine.id}", headers=self.auth(self.agent))
        body = response.json()
        self.assertEqual([a["step"] for a in body["approvals"]], ["application"])
        self.assertEqual([t["title"] for t in body["tasks"]], ["Site survey"])

    def test_agent_cannot_read_other_agents_client(self):
        response = self.client.get(f"/api/clients/{self.theirs.id}", headers=self.auth(self.agent))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Client not found"})

    def test_agent_created_client_is_assigned_to_agent(self):
        response = self.client.post("/api/clients", headers=self.auth(self.agent), json={
            "name": "Kiran Patel",
            "phone": "9000000001",
            "address": "4 Park Street, Kolkata",
        })
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["assignedAgentId"], self.agent.id)
        self.assertEqual(body["projectStatus"], "lead")
        self.assertTrue(body["id"])
        self.assertTrue(body["createdAt"])

    def test_admin_created_client_may_stay_unassigned(self):
        response = self.client.post("/api/clients", headers=self.auth(self.admin), json={
            "name": "Kiran Patel",
            "phone": "9000000001",
            "address": "4 Park Street, Kolkata",
        })
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()["assignedAgentId"])

    def test_create_rejects_unknown_status(self):
        response = self.client.post("/api/clients", headers=self.auth(self.admin), json={
            "name": "Kiran Patel",
            "phone": "9000000001",
            "address": "4 Park Street, Kolkata",
            "projectStatus": "abandoned",
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid request data")

    def test_create_requires_phone(self):
        response = self.client.post("/api/clients", headers=self.auth(self.admin), json={
            "name": "Kiran Patel",
            "address": "4 Park Street, Kolkata",
        })
        self.assertEqual(response.status_code, 400)

    def test_partial_update(self):
        response = self.client.put(f"/api/clients/{self.mine.id}", headers=self.auth(self.agent), json={
            "projectStatus": "in-progress",
        })
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["projectStatus"], "in-progress")
        self.assertEqual(body["name"], "Asha Rao")
        self.assertEqual(body["phone"], "9876543210")

    def test_update_rejects_null_required_fields(self):
        for field in ("name", "phone", "address", "projectStatus"):
            with self.subTest(field=field):
                response = self.client.put(f"/api/clients/{self.mine.id}", headers=self.auth(self.agent),
                                           json={field: None})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["message"], "Invalid request data")

        self.db.refresh(self.mine)
        self.assertEqual(self.mine.name, "Asha Rao")

    def test_update_may_clear_optional_fields(self):
        response = self.client.put(f"/api/clients/{self.mine.id}", headers=self.auth(self.admin), json={
            "email": None,
            "assignedAgentId": None,
        })
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["assignedAgentId"])

    def test_agent_cannot_update_other_agents_client(self):
        response = self.client.put(f"/api/clients/{self.theirs.id}", headers=self.auth(self.agent), json={
            "projectStatus": "completed",
        })
        self.assertEqual(response.status_code, 404)

    def test_update_missing_client(self):
        response = self.client.put("/api/clients/does-not-exist", headers=self.auth(self.admin), json={
            "name": "Nobody",
        })
        self.assertEqual(response.status_code, 404)


class ApprovalApiTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.client_row = self.make_client("Asha Rao", self.agent)

    def test_create_and_filter_by_client(self):
        other = self.make_client("Vikram Das", self.other_agent)
        self.make_approval(other.id, "application")

        response = self.client.post("/api/approvals", headers=self.auth(self.agent), json={
            "clientId": self.client_row.id,
            "step": "verification",
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["status"], "pending")

        listed = self.client.get(
            "/api/approvals", params={"clientId": self.client_row.id}, headers=self.auth(self.agent)
        ).json()
        self.assertEqual([a["step"] for a in listed], ["verification"])

        everything = self.client.get("/api/approvals", headers=self.auth(self.agent)).json()
        self.assertEqual(len(everything), 2)

    def test_rejects_unknown_step(self):
        response = self.client.post("/api/approvals", headers=self.auth(self.admin), json={
            "clientId": self.client_row.id,
            "step": "permit",
        })
        self.assertEqual(response.status_code, 400)

    def test_update_status_and_progress(self):
        approval = self.make_approval(self.client_row.id, "application")
        self.make_approval(self.client_row.id, "verification", "approved")

        response = self.client.put(f"/api/approvals/{approval.id}", headers=self.auth(self.admin), json={
            "status": "approved",
            "remarks": "Documents verified",
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "approved")
        self.assertEqual(response.json()["remarks"], "Documents verified")

        progress = self.client.get(
            f"/api/approvals/progress/{self.client_row.id}", headers=self.auth(self.admin)
        ).json()
        self.assertEqual(progress, {
            "clientId": self.client_row.id,
            "completedSteps": 2,
            "totalSteps": 5,
            "percentage": 40,
        })

    def test_update_rejects_null_status(self):
        approval = self.make_approval(self.client_row.id, "application")
        for field in ("status", "step", "clientId"):
            with self.subTest(field=field):
                response = self.client.put(f"/api/approvals/{approval.id}", headers=self.auth(self.admin),
                                           json={field: None})
                self.assertEqual(response.status_code, 400)

    def test_update_missing_approval(self):
        response = self.client.put("/api/approvals/nope", headers=self.auth(self.admin), json={
            "status": "approved",
        })
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
