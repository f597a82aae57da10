from jewelry_api.config import TestingConfig
from jewelry_api.models.user_model import User


def new_user_payload(**overrides):
    payload = {
        "email": "new@example.com",
        "password": "secret123",
        "firstName": "Nadia",
        "lastName": "Salem",
        "role": "sales",
        "branchId": "b1",
    }
    payload.update(overrides)
    return payload


class TestCreateUser:
    def test_admin_creates_manager(self, client, identity, login_as):
        _, headers = login_as("admin")
        resp = client.post("/api/users", json=new_user_payload(role="manager", branchId="b2"), headers=headers)

        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["role"] == "manager"
        assert data["branchId"] == "b2"
        assert data["isDelete"] is False
        assert "password" not in data
        assert identity.accounts[data["uid"]]["claims"]["role"] == "manager"

    def test_manager_creates_sales_in_own_branch(self, client, login_as):
        _, headers = login_as("manager", "b1")
        resp = client.post("/api/users", json=new_user_payload(), headers=headers)
        assert resp.status_code == 201

    def test_manager_cannot_create_manager(self, client, identity, login_as):
        _, headers = login_as("manager", "b1")
        resp = client.post("/api/users", json=new_user_payload(role="manager"), headers=headers)
        assert resp.status_code == 403
        # nothing was created at the identity provider
        assert not any(a["email"] == "new@example.com" for a in identity.accounts.values())

    def test_manager_cannot_create_in_other_branch(self, client, login_as):
        _, headers = login_as("manager", "b1")
        resp = client.post("/api/users", json=new_user_payload(branchId="b2"), headers=headers)
        assert resp.status_code == 403

    def test_sales_cannot_create(self, client, login_as):
        _, headers = login_as("sales", "b1")
        resp = client.post("/api/users", json=new_user_payload(), headers=headers)
        assert resp.status_code == 403

    def test_missing_fields(self, client, login_as):
        _, headers = login_as("admin")
        payload = new_user_payload()
        del payload["role"]
        resp = client.post("/api/users", json=payload, headers=headers)
        assert resp.status_code == 400

    def test_duplicate_email_is_409(self, client, make_user, login_as):
        make_user("sales", branch_id="b1", email="new@example.com")
        _, headers = login_as("admin")
        resp = client.post("/api/users", json=new_user_payload(), headers=headers)
        assert resp.status_code == 409

    def test_credential_rolled_back_when_claims_fail(self, app, client, identity, login_as):
        _, headers = login_as("admin")
        identity.fail_claims = True

        resp = client.post("/api/users", json=new_user_payload(), headers=headers)

        assert resp.status_code == 500
        assert len(identity.deleted) == 1
        uid = identity.deleted[0]
        assert uid not in identity.accounts
        with app.app_context():
            assert User.get_by_id(uid) is None

    def test_profile_write_failure_removes_credential_only(self, app, client, identity, mongo_client, login_as):
        _, headers = login_as("admin")
        users = mongo_client[TestingConfig.DB_NAME]["users"]
        users.insert_one({"_id": "uid-taken", "email": "someone@example.com", "role": "sales", "isDelete": False})
        identity.next_uid = "uid-taken"

        resp = client.post("/api/users", json=new_user_payload(), headers=headers)

        assert resp.status_code == 500
        assert resp.get_json()["success"] is False
        assert identity.deleted == ["uid-taken"]
        assert "uid-taken" not in identity.accounts
        # the document that caused the clash belongs to someone else
        assert users.find_one({"_id": "uid-taken"})["email"] == "someone@example.com"

    def test_failed_cleanup_is_not_surfaced(self, client, identity, login_as):
        _, headers = login_as("admin")
        identity.fail_claims = True
        identity.fail_delete = True

        resp = client.post("/api/users", json=new_user_payload(), headers=headers)

        # the claims failure is reported, not the cleanup failure
        assert resp.status_code == 500
        assert "identity provider unavailable" in str(resp.get_json().get("errors"))


class TestListAndRead:
    def test_admin_lists_everyone_active(self, client, make_user, login_as):
        make_user("sales", branch_id="b1")
        make_user("sales", branch_id="b2")
        make_user("sales", branch_id="b2", deleted=True)
        _, headers = login_as("admin")

        resp = client.get("/api/users", headers=headers)

        assert resp.status_code == 200
        branches = sorted(u["branchId"] for u in resp.get_json()["data"])
        assert branches == ["", "b1", "b2"]

    def test_manager_lists_own_branch(self, client, make_user, login_as):
        make_user("sales", branch_id="b1")
        make_user("sales", branch_id="b2")
        _, headers = login_as("manager", "b1")

        resp = client.get("/api/users", headers=headers)

        users = resp.get_json()["data"]
        assert {u["branchId"] for u in users} == {"b1"}
        assert len(users) == 2

    def test_sales_cannot_list(self, client, login_as):
        _, headers = login_as("sales", "b1")
        assert client.get("/api/users", headers=headers).status_code == 403

    def test_sales_reads_self(self, client, login_as):
        uid, headers = login_as("sales", "b1")
        resp = client.get(f"/api/users/{uid}", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["uid"] == uid

    def test_manager_reads_other_branch_forbidden(self, client, make_user, login_as):
        other = make_user("sales", branch_id="b2")
        _, headers = login_as("manager", "b1")
        assert client.get(f"/api/users/{other}", headers=headers).status_code == 403

    def test_unknown_user_is_404(self, client, login_as):
        _, headers = login_as("admin")
        assert client.get("/api/users/missing", headers=headers).status_code == 404

    def test_deleted_user_still_readable_by_id(self, client, make_user, login_as):
        gone = make_user("sales", branch_id="b1", deleted=True)
        _, headers = login_as("admin")
        resp = client.get(f"/api/users/{gone}", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()["data"]["isDelete"] is True


class TestUpdateUser:
    def test_manager_updates_sales_in_branch(self, client, identity, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("manager", "b1")

        resp = client.put(f"/api/users/{target}", json={"role": "sales", "branchId": "b1"}, headers=headers)

        assert resp.status_code == 200
        assert "updatedAt" in resp.get_json()["data"]
        assert identity.accounts[target]["claims"]["branchId"] == "b1"

    def test_manager_cannot_promote_to_admin(self, client, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("manager", "b1")
        resp = client.put(f"/api/users/{target}", json={"role": "admin"}, headers=headers)
        assert resp.status_code == 403

    def test_manager_cannot_move_user(self, client, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("manager", "b1")
        resp = client.put(f"/api/users/{target}", json={"branchId": "b2"}, headers=headers)
        assert resp.status_code == 403

    def test_empty_update_is_400(self, client, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("admin")
        resp = client.put(f"/api/users/{target}", json={}, headers=headers)
        assert resp.status_code == 400

    def test_admin_moves_user_and_claims_follow(self, app, client, identity, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("admin")

        resp = client.put(f"/api/users/{target}", json={"branchId": "b2", "role": "manager"}, headers=headers)

        assert resp.status_code == 200
        with app.app_context():
            stored = User.get_by_id(target)
        assert stored["branchId"] == "b2"
        assert stored["role"] == "manager"
        assert identity.accounts[target]["claims"]["role"] == "manager"

    def test_last_admin_cannot_be_demoted(self, client, login_as):
        uid, headers = login_as("admin")
        resp = client.put(f"/api/users/{uid}", json={"role": "manager"}, headers=headers)
        assert resp.status_code == 409

    def test_admin_demoted_when_another_admin_exists(self, client, make_user, login_as):
        other = make_user("admin")
        _, headers = login_as("admin")
        resp = client.put(f"/api/users/{other}", json={"role": "manager"}, headers=headers)
        assert resp.status_code == 200


class TestDeleteUser:
    def test_last_admin_cannot_be_deleted(self, client, login_as):
        uid, headers = login_as("admin")
        resp = client.delete(f"/api/users/{uid}", headers=headers)
        assert resp.status_code == 409

    def test_deleted_admins_do_not_count(self, client, make_user, login_as):
        make_user("admin", deleted=True)
        uid, headers = login_as("admin")
        assert client.delete(f"/api/users/{uid}", headers=headers).status_code == 409

    def test_admin_deletes_other_admin(self, client, make_user, login_as):
        other = make_user("admin")
        _, headers = login_as("admin")
        assert client.delete(f"/api/users/{other}", headers=headers).status_code == 200

    def test_soft_delete_revokes_tokens_and_hides_from_list(self, app, client, identity, auth_headers, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        target_headers = auth_headers(target, "sales", "b1")
        _, headers = login_as("manager", "b1")

        resp = client.delete(f"/api/users/{target}", headers=headers)

        assert resp.status_code == 200
        with app.app_context():
            stored = User.get_by_id(target)
        assert stored["isDelete"] is True
        assert "deletedAt" in stored

        listed = client.get("/api/users", headers=headers).get_json()["data"]
        assert target not in [u["uid"] for u in listed]

        # the deleted user's session is gone
        assert client.get("/api/items", headers=target_headers).status_code == 401

    def test_delete_twice_is_idempotent(self, client, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("admin")
        assert client.delete(f"/api/users/{target}", headers=headers).status_code == 200
        assert client.delete(f"/api/users/{target}", headers=headers).status_code == 200

    def test_delete_unknown_user_is_404(self, client, login_as):
        _, headers = login_as("admin")
        assert client.delete("/api/users/missing", headers=headers).status_code == 404

    def test_manager_cannot_delete_admin(self, client, make_user, login_as):
        make_user("admin")
        other_admin = make_user("admin", branch_id="b1")
        _, headers = login_as("manager", "b1")
        assert client.delete(f"/api/users/{other_admin}", headers=headers).status_code == 403

    def test_sales_cannot_delete(self, client, make_user, login_as):
        target = make_user("sales", branch_id="b1")
        _, headers = login_as("sales", "b1")
        assert client.delete(f"/api/users/{target}", headers=headers).status_code == 403
