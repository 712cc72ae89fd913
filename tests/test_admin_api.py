# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
import uuid
from pathlib import Path

from fastapi.testclient import TestClient

ADMIN_EMAIL = "coach-admin@example.com"


class TestAdminApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="fitcoach-admin-test-"))
        data_root = cls._tmp / "data"
        os.environ["FITCOACH_DATA_ROOT"] = str(data_root)
        os.environ["FITCOACH_DB_PATH"] = str(data_root / "fitcoach.db")
        os.environ["FITCOACH_JWT_SECRET"] = "test-secret"
        os.environ["FITCOACH_ADMIN_EMAILS"] = f" {ADMIN_EMAIL.upper()} , other-admin@example.com"

        for name in list(sys.modules.keys()):
            if name.startswith("fitcoach."):
                sys.modules.pop(name, None)

        from fitcoach.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)
        resp = cls.client.post("/api/auth/register", json={"email": ADMIN_EMAIL, "password": "password123"})
        cls.admin = {"Authorization": f"Bearer {resp.json()['token']}"}

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        os.environ.pop("FITCOACH_ADMIN_EMAILS", None)
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _register(self) -> tuple[str, dict]:
        email = f"member-{uuid.uuid4().hex[:8]}@example.com"
        resp = self.client.post("/api/auth/register", json={"email": email, "password": "password123"})
        body = resp.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    def test_admin_flag_is_derived_from_allow_list(self) -> None:
        me = self.client.get("/api/auth/me", headers=self.admin).json()
        self.assertTrue(me["is_admin"])
        _, member = self._register()
        self.assertFalse(self.client.get("/api/auth/me", headers=member).json()["is_admin"])

    def test_members_are_forbidden(self) -> None:
        _, member = self._register()
        for path in ("/api/admin/users", "/api/admin/stats", "/api/admin/metrics", "/api/admin/logs"):
            self.assertEqual(self.client.get(path, headers=member).status_code, 403, path)
        resp = self.client.post(
            "/api/admin/users/bulk", json={"user_ids": ["x"], "action": "notify"}, headers=member
        )
        self.assertEqual(resp.status_code, 403)

    def test_bulk_reset_tools_reverts_to_defaults(self) -> None:
        user_id, member = self._register()
        self.client.put(
            "/api/tools/state",
            json={"hydration": {"consumedMl": 1800}, "boxing": {"rounds": 8}},
            headers=member,
        )
        self.assertEqual(self.client.get("/api/tools/state", headers=member).json()["boxing"]["rounds"], 8)

        resp = self.client.post(
            "/api/admin/users/bulk", json={"user_ids": [user_id], "action": "resetTools"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Tool states reset.", "affected": 1})

        state = self.client.get("/api/tools/state", headers=member).json()
        self.assertEqual(state["hydration"]["consumedMl"], 0)
        self.assertEqual(state["boxing"]["rounds"], 3)

    def test_bulk_set_tier_is_seen_on_next_request(self) -> None:
        first_id, first = self._register()
        second_id, _ = self._register()
        resp = self.client.post(
            "/api/admin/users/bulk",
            json={"user_ids": [first_id, second_id], "action": "setTier", "tier": "elite"},
            headers=self.admin,
        )
        self.assertEqual(resp.json()["affected"], 2)
        self.assertEqual(self.client.get("/api/auth/me", headers=first).json()["subscription_tier"], "elite")

        bad = self.client.post(
            "/api/admin/users/bulk",
            json={"user_ids": [first_id], "action": "setTier", "tier": "gold"},
            headers=self.admin,
        )
        self.assertEqual(bad.status_code, 400)
        empty = self.client.post(
            "/api/admin/users/bulk", json={"user_ids": ["", "  "], "action": "notify"}, headers=self.admin
        )
        self.assertEqual(empty.status_code, 400)
        unknown = self.client.post(
            "/api/admin/users/bulk", json={"user_ids": [first_id], "action": "wipe"}, headers=self.admin
        )
        self.assertEqual(unknown.status_code, 422)

    def test_single_subscription_update_and_logs(self) -> None:
        user_id, member = self._register()
        resp = self.client.put(
            f"/api/admin/users/{user_id}/subscription", json={"tier": "pro"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["subscription_tier"], "pro")
        self.assertEqual(self.client.get("/api/meal-scans/stats", headers=member).json()["limit"], 30)

        missing = self.client.put("/api/admin/users/nope/subscription", json={"tier": "pro"}, headers=self.admin)
        self.assertEqual(missing.status_code, 404)

        logs = self.client.get("/api/admin/logs", headers=self.admin).json()["logs"]
        entry = next(e for e in logs if e["action"] == "update_tier" and e["payload"]["target_user_id"] == user_id)
        self.assertEqual(entry["admin_email"], ADMIN_EMAIL)
        self.assertEqual(entry["payload"]["tier"], "pro")

    def test_user_listing_details_and_stats(self) -> None:
        user_id, member = self._register()
        self.client.post("/api/analysis", json={"type": "image", "result": "Neutral spine."}, headers=member)
        self.client.post("/api/plans", json={"plan_name": "Base", "plan": {}}, headers=member)

        users = self.client.get("/api/admin/users", headers=self.admin).json()["users"]
        row = next(u for u in users if u["id"] == user_id)
        self.assertEqual((row["analysis_count"], row["plan_count"], row["goals_completed"]), (1, 1, 0))
        admin_row = next(u for u in users if u["email"] == ADMIN_EMAIL)
        self.assertTrue(admin_row["is_admin"])

        details = self.client.get(f"/api/admin/users/{user_id}/details", headers=self.admin).json()
        self.assertEqual(len(details["analyses"]), 1)
        self.assertEqual(details["plans"][0]["plan_name"], "Base")
        self.assertEqual(self.client.get("/api/admin/users/nope/details", headers=self.admin).status_code, 404)

        stats = self.client.get("/api/admin/stats", headers=self.admin).json()
        self.assertGreaterEqual(stats["total_users"], 2)
        xp_total = stats["total_analyses"] * 10 + stats["total_plans"] * 15 + stats["total_goals_completed"] * 5
        self.assertEqual(stats["avg_xp"], round(xp_total / stats["total_users"]))
        self.assertLessEqual(len(stats["top_users"]), 5)

    def test_metrics_range_is_clamped(self) -> None:
        short = self.client.get("/api/admin/metrics?range=3", headers=self.admin).json()
        self.assertEqual(short["range"], 7)
        self.assertEqual(len(short["analysis_series"]), 7)
        self.assertEqual(len(short["signup_series"]), 7)
        self.assertGreaterEqual(short["signup_series"][-1]["count"], 1)

        long = self.client.get("/api/admin/metrics?range=500", headers=self.admin).json()
        self.assertEqual(long["range"], 90)
        self.assertEqual(self.client.get("/api/admin/metrics", headers=self.admin).json()["range"], 14)


if __name__ == "__main__":
    unittest.main()
