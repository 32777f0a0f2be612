"""
Tests for the SQLite record store and the table repositories.
"""
import pytest

from core.exceptions import RecordConflictError


class TestSQLiteRecordStore:
    """Generic store operations."""

    def test_insert_generates_id(self, temp_store):
        row = temp_store.insert("sessions", {"user_id": "u1", "expires_at": "x", "created_at": "y"})
        assert row["id"]
        assert temp_store.select_one("sessions", {"id": row["id"]}) == row

    def test_insert_keeps_given_id(self, temp_store):
        row = temp_store.insert("profiles", {"id": "user-1", "email": "a@b.co"})
        assert row["id"] == "user-1"

    def test_duplicate_primary_key_raises_conflict(self, temp_store):
        temp_store.insert("profiles", {"id": "user-1"})
        with pytest.raises(RecordConflictError):
            temp_store.insert("profiles", {"id": "user-1"})

    def test_json_and_bool_columns_round_trip(self, temp_store):
        temp_store.insert("profiles", {
            "id": "user-1",
            "allergies": ["Food", "Seasonal"],
            "medical_details_completed": True,
        })
        row = temp_store.select_one("profiles", {"id": "user-1"})
        assert row["allergies"] == ["Food", "Seasonal"]
        assert row["chronic_conditions"] is None
        assert row["medical_details_completed"] is True

    def test_select_filters_orders_and_limits(self, temp_store):
        for i, user in enumerate(["a", "b", "a", "a"]):
            temp_store.insert("bmi_records", {
                "user_id": user, "bmi": 20.0 + i, "category": "Normal weight",
                "height": 170, "weight": 60, "calculated_at": f"2026-01-0{i + 1}",
            })

        rows = temp_store.select("bmi_records", {"user_id": "a"}, order_by="calculated_at", descending=True, limit=2)
        assert [r["bmi"] for r in rows] == [23.0, 22.0]

    def test_none_filter_matches_null(self, temp_store):
        temp_store.insert("profiles", {"id": "with-name", "full_name": "X"})
        temp_store.insert("profiles", {"id": "no-name"})
        assert [r["id"] for r in temp_store.select("profiles", {"full_name": None})] == ["no-name"]

    def test_update_returns_row_and_ignores_id(self, temp_store):
        temp_store.insert("profiles", {"id": "user-1", "age": 20})
        row = temp_store.update("profiles", "user-1", {"id": "hijack", "age": 21})
        assert row["id"] == "user-1"
        assert row["age"] == 21

    def test_update_missing_row_returns_none(self, temp_store):
        assert temp_store.update("profiles", "missing", {"age": 21}) is None

    def test_delete(self, temp_store):
        temp_store.insert("profiles", {"id": "user-1"})
        assert temp_store.delete("profiles", "user-1") is True
        assert temp_store.delete("profiles", "user-1") is False

    def test_unknown_table_or_column_rejected(self, temp_store):
        with pytest.raises(ValueError):
            temp_store.select("patients")
        with pytest.raises(ValueError):
            temp_store.select("profiles", {"password_hash": "x"})

    def test_ping(self, temp_store):
        temp_store.ping()


class TestRepositories:
    """Table repositories on top of the store."""

    def test_profile_create_and_update(self, profile_repo):
        profile = profile_repo.create("user-1", email="a@b.co", full_name="Ann")
        assert profile.medical_details_completed is False
        assert profile.display_name == "Ann"

        updated = profile_repo.update("user-1", {"age": 19})
        assert updated.age == 19
        assert profile_repo.update("missing", {"age": 19}) is None

    def test_assessment_scoped_to_user(self, assessment_repo):
        row = assessment_repo.add("u1", "Ann", "a@b.co", 40, "Fair", ["r"], [], None)
        assert row["recommendations"] == ["r"]
        assert assessment_repo.get_for_user("u1", row["id"])["score"] == 40
        assert assessment_repo.get_for_user("u2", row["id"]) is None

    def test_medical_record_count(self, medical_record_repo):
        for i in range(3):
            medical_record_repo.add(
                user_id="u1", file_name=f"{i}.pdf", file_url="http://x", file_path=f"p/{i}.pdf",
                file_type="application/pdf",
            )
        assert medical_record_repo.count_for_user("u1") == 3
        assert medical_record_repo.count_for_user("u2") == 0
