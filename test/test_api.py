"""HTTP surface: auth, roster, uploads, rankings, dashboard and exports."""

from datetime import date

import pytest

from api.database import get_today
from conftest import ADMIN_PASSWORD, PRODUCTIVITY_HEADER, ROSTER_HEADER


def csv_file(content, filename="data.csv"):
    return {"csvFile": (filename, content.encode("utf-8"), "text/csv")}


def upload_month(client, headers, *rows):
    content = "\n".join((PRODUCTIVITY_HEADER,) + rows)
    return client.post("/api/upload-csv", files=csv_file(content), headers=headers)


class TestHealth:
    def test_root_and_health(self, client):
        assert client.get("/").json()["status"] == "healthy"
        body = client.get("/health").json()
        assert body["storage"] == "memory"
        assert body["version"] == "1.0.0"


class TestAuth:
    def test_status_without_token(self, client):
        assert client.get("/api/auth/status").json() == {"isAdmin": False}

    def test_status_with_token(self, client, admin_headers):
        assert client.get("/api/auth/status", headers=admin_headers).json() == {"isAdmin": True}

    def test_garbage_token_is_not_admin(self, client):
        response = client.get("/api/auth/status", headers={"Authorization": "Bearer nope"})
        assert response.json() == {"isAdmin": False}

    def test_wrong_password(self, client):
        response = client.post("/api/auth/login", json={"password": "guess"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid password"}

    def test_login_is_rate_limited(self, client):
        for _ in range(5):
            assert client.post("/api/auth/login", json={"password": "guess"}).status_code == 401
        response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
        assert response.status_code == 429
        assert "Retry-After" in response.headers

    def test_successful_login_resets_attempts(self, client):
        for _ in range(4):
            client.post("/api/auth/login", json={"password": "guess"})
        assert client.post("/api/auth/login", json={"password": ADMIN_PASSWORD}).status_code == 200
        for _ in range(4):
            assert client.post("/api/auth/login", json={"password": "guess"}).status_code == 401

    def test_login_response(self, client):
        body = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD}).json()
        assert body["success"] is True
        assert body["tokenType"] == "bearer"
        assert body["token"]

    def test_logout(self, client):
        assert client.post("/api/auth/logout").json()["success"] is True

    def test_change_password(self, client, admin_headers):
        response = client.post(
            "/api/auth/change-password",
            json={"currentPassword": ADMIN_PASSWORD, "newPassword": "even-better-horse"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert client.post("/api/auth/login", json={"password": "even-better-horse"}).status_code == 200

    def test_change_password_errors(self, client, admin_headers):
        short = client.post(
            "/api/auth/change-password",
            json={"currentPassword": ADMIN_PASSWORD, "newPassword": "short"},
            headers=admin_headers,
        )
        assert short.status_code == 400

        wrong = client.post(
            "/api/auth/change-password",
            json={"currentPassword": "not-it", "newPassword": "long-enough-pass"},
            headers=admin_headers,
        )
        assert wrong.status_code == 401
        assert wrong.json()["message"] == "Current password is incorrect"

    def test_change_password_requires_admin(self, client):
        response = client.post(
            "/api/auth/change-password",
            json={"currentPassword": ADMIN_PASSWORD, "newPassword": "long-enough-pass"},
        )
        assert response.status_code == 401


class TestContractors:
    def test_list_uses_camel_case(self, client):
        contractors = client.get("/api/contractors").json()
        assert [c["id"] for c in contractors] == [1, 2, 3, 4]
        assert contractors[2]["contractorType"] == "Part Time"
        assert "workEmail" in contractors[0]

    def test_create_requires_admin(self, client):
        assert client.post("/api/contractors", json={"name": "New"}).status_code == 401

    def test_create_assigns_next_id(self, client, admin_headers):
        response = client.post(
            "/api/contractors",
            json={"name": "Drew Lane", "workLocation": "Remote"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["id"] == 5
        assert response.json()["workLocation"] == "Remote"

    def test_create_duplicate_id(self, client, admin_headers):
        response = client.post("/api/contractors", json={"id": 1, "name": "Again"}, headers=admin_headers)
        assert response.status_code == 409

    def test_create_without_name(self, client, admin_headers):
        response = client.post("/api/contractors", json={"workLocation": "Remote"}, headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["message"] == "Invalid data"

    def test_update(self, client, admin_headers):
        response = client.put(
            "/api/contractors/2",
            json={"position": "Lead Producer", "contractorType": "Part Time"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 2
        assert body["position"] == "Lead Producer"
        assert body["contractorType"] == "Part Time"
        assert body["name"] == "Jordan Ellis"

    def test_update_missing(self, client, admin_headers):
        response = client.put("/api/contractors/404", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Contractor not found"

    def test_delete_archives(self, client, admin_headers):
        upload_month(client, admin_headers, "1,Avery Quinn,Aug-25,100,110,90")
        response = client.delete("/api/contractors/1", headers=admin_headers)
        assert response.status_code == 200
        assert "archived" in response.json()["message"]

        combined = {c["id"]: c for c in client.get("/api/contractors/with-data").json()}
        assert combined[1]["status"] == "archived"
        assert len(combined[1]["productivityData"]) == 1

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/contractors/404", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Contractor not found"


class TestUploads:
    def test_requires_admin(self, client):
        content = PRODUCTIVITY_HEADER + "\n1,Avery,Aug-25,1,1,1"
        assert client.post("/api/upload-csv", files=csv_file(content)).status_code == 401

    def test_productivity_upload_with_unknown_contractor(self, client, admin_headers):
        response = upload_month(
            client, admin_headers,
            "1,Avery Quinn,Aug-25,114:39:00,120.17,95.20",
            "999,Ghost,Aug-25,100,110,90",
        )
        assert response.status_code == 200
        body = response.json()
        assert body["processed"] == 1
        assert body["message"] == "Successfully processed 1 records"
        assert len(body["errors"]) == 1
        assert body["errors"][0].startswith("Row 3:")
        assert body["data"][0]["contractorId"] == 1
        assert body["data"][0]["productiveHours"] == pytest.approx(114.65)

        rankings = client.get("/api/rankings/Aug-25").json()
        assert [(r["contractorId"], r["rank"]) for r in rankings] == [(1, 1)]

    def test_header_mismatch(self, client, admin_headers):
        content = "Id,Who,When\n1,A,Aug-25"
        response = client.post("/api/upload-csv", files=csv_file(content), headers=admin_headers)
        assert response.status_code == 400
        body = response.json()
        assert body["expected"][0] == "Emp No."
        assert body["received"] == ["Id", "Who", "When"]

    def test_roster_sent_to_productivity_endpoint(self, client, admin_headers):
        content = ROSTER_HEADER + "\nA,1,,,,,,,"
        response = client.post("/api/upload-csv", files=csv_file(content), headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["suggestedMode"] == "roster"

    def test_no_valid_rows(self, client, admin_headers):
        response = upload_month(client, admin_headers, "999,Ghost,Aug-25,1,1,1")
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "No valid data to process"
        assert len(body["errors"]) == 1

    def test_empty_file(self, client, admin_headers):
        response = client.post("/api/upload-csv", files=csv_file(PRODUCTIVITY_HEADER), headers=admin_headers)
        assert response.status_code == 400

    def test_missing_file(self, client, admin_headers):
        response = client.post("/api/upload-csv", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"

    def test_non_csv_file(self, client, admin_headers):
        files = {"csvFile": ("notes.txt", b"hello", "text/plain")}
        response = client.post("/api/upload-csv", files=files, headers=admin_headers)
        assert response.status_code == 400

    def test_file_over_the_size_cap(self, client, settings, admin_headers):
        content = "\n".join([PRODUCTIVITY_HEADER] + ["1,Avery,Aug-25,1,1,100"] * 5)
        settings.max_upload_bytes = len(content.encode("utf-8")) - 1
        response = client.post("/api/upload-csv", files=csv_file(content), headers=admin_headers)
        assert response.status_code == 413
        assert response.json()["message"] == "File too large"

    def test_file_exactly_at_the_size_cap(self, client, settings, admin_headers):
        content = PRODUCTIVITY_HEADER + "\n1,Avery,Aug-25,1,1,100"
        settings.max_upload_bytes = len(content.encode("utf-8"))
        response = client.post("/api/upload-csv", files=csv_file(content), headers=admin_headers)
        assert response.status_code == 200

    def test_roster_upload(self, client, admin_headers):
        content = "\n".join([
            ROSTER_HEADER,
            "Sam Carter,12,,sam@example.com,Egypt,Support,7/21/2025,,2/3/1992",
        ])
        response = client.post(
            "/api/upload-contractor-roster", files=csv_file(content, "roster.csv"), headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully processed 1 contractors"
        assert response.json()["data"][0]["workLocation"] == "Egypt"
        assert 12 in [c["id"] for c in client.get("/api/contractors").json()]


class TestRankings:
    @pytest.fixture
    def month(self, client, admin_headers):
        upload_month(
            client, admin_headers,
            "1,Avery Quinn,Aug-25,95,100,95",
            "2,Jordan Ellis,Aug-25,150,160,93.75",
            "3,Riley Park,Aug-25,40,42,95.2",
            "4,Casey Morgan,Aug-25,120,125,96",
        )
        return "Aug-25"

    def test_rankings(self, client, month):
        rankings = client.get(f"/api/rankings/{month}").json()
        assert [r["contractorId"] for r in rankings] == [2, 4, 1, 3]
        assert [r["rank"] for r in rankings] == [1, 2, 3, 4]

    def test_top_performers(self, client, month):
        assert len(client.get(f"/api/top-performers/{month}").json()) == 3
        assert len(client.get(f"/api/top-performers/{month}?limit=1").json()) == 1
        assert len(client.get(f"/api/top-performers/{month}?limit=0").json()) == 3

    @pytest.mark.parametrize("limit", ["abc", "-2", "1.5", ""])
    def test_unusable_top_limit_falls_back_to_three(self, client, month, limit):
        response = client.get(f"/api/top-performers/{month}", params={"limit": limit})
        assert response.status_code == 200
        assert [r["rank"] for r in response.json()] == [1, 2, 3]

    def test_under_performers(self, client, month):
        flagged = client.get(f"/api/under-performers/{month}").json()
        assert [(r["contractorId"], r["contractorType"]) for r in flagged] == [(3, "Part Time"), (1, "Full Time")]

    def test_month_records(self, client, month):
        records = client.get(f"/api/productivity/{month}").json()
        assert records[0]["contractorId"] == 2
        assert client.get("/api/productivity/Jan-20").json() == []

    def test_unknown_month_has_empty_rankings(self, client):
        assert client.get("/api/rankings/Jan-20").json() == []


class TestDeleteMonth:
    def test_bad_month_format(self, client, admin_headers):
        response = client.delete("/api/productivity/August", headers=admin_headers)
        assert response.status_code == 400

    def test_foreign_origin(self, client, admin_headers):
        upload_month(client, admin_headers, "1,Avery,Aug-25,10,10,100")
        headers = dict(admin_headers, Origin="http://elsewhere.example")
        assert client.delete("/api/productivity/Aug-25", headers=headers).status_code == 403

    def test_nothing_to_delete(self, client, admin_headers):
        assert client.delete("/api/productivity/Aug-25", headers=admin_headers).status_code == 404

    def test_requires_admin(self, client):
        assert client.delete("/api/productivity/Aug-25").status_code == 401

    def test_delete(self, client, admin_headers):
        upload_month(client, admin_headers, "1,Avery,Aug-25,10,10,100")
        headers = dict(admin_headers, Origin="http://testserver")
        response = client.delete("/api/productivity/Aug-25", headers=headers)
        assert response.status_code == 200
        assert client.get("/api/productivity/Aug-25").json() == []


class TestDashboard:
    def test_summary_without_data(self, client):
        body = client.get("/api/dashboard/summary").json()
        assert body["totalContractors"] == 3
        assert body["totalHours"] == 0
        assert body["aboveThresholdPercentage"] == 0

    def test_summary_uses_latest_month(self, client, admin_headers):
        upload_month(client, admin_headers, "1,Avery,Jul-25,50,60,83.3")
        upload_month(client, admin_headers, "1,Avery,Aug-25,120,125,96", "2,Jordan,Aug-25,80,90,88.9")
        body = client.get("/api/dashboard/summary").json()
        assert body["currentMonth"] == "Aug-25"
        assert body["totalHours"] == pytest.approx(200)
        assert body["averageHours"] == pytest.approx(100)
        assert body["aboveThresholdPercentage"] == 50
        assert body["topPerformers"][0]["contractorId"] == 1

        july = client.get("/api/dashboard/summary?month=Jul-25").json()
        assert july["currentMonth"] == "Jul-25"

    @pytest.fixture
    def october_first(self, client):
        client.app.dependency_overrides[get_today] = lambda: date(2025, 10, 1)
        yield date(2025, 10, 1)
        client.app.dependency_overrides.pop(get_today, None)

    def test_special_sections_on_a_fixed_day(self, client, storage, october_first):
        storage.update_contractor(1, {"birthday": "10/16/1987", "start_date": "10/21/2022"})
        storage.update_contractor(4, {"birthday": "10/02/1990"})

        body = client.get("/api/dashboard/special-sections").json()

        assert set(body) == {"birthdays", "anniversaries", "holidays"}
        assert [(b["name"], b["daysUntil"], b["date"]) for b in body["birthdays"]] == [
            ("Avery Quinn", 15, "2025-10-16")
        ]
        assert [(a["name"], a["years"], a["daysUntil"]) for a in body["anniversaries"]] == [
            ("Avery Quinn", 3, 20)
        ]
        assert [(h["name"], h["date"], h["daysUntil"]) for h in body["holidays"]] == [
            ("Columbus Day", "2025-10-13", 12),
            ("Veterans Day", "2025-11-11", 41),
            ("Thanksgiving", "2025-11-27", 57),
            ("Christmas Day", "2025-12-25", 85),
        ]

    def test_holidays_are_the_rest_of_the_current_year(self, client):
        today = date.today()
        holidays = client.get("/api/dashboard/special-sections").json()["holidays"]
        dates = [h["date"] for h in holidays]
        assert dates == sorted(dates)
        for holiday in holidays:
            assert holiday["daysUntil"] >= 0
            assert holiday["date"].startswith(f"{today.year}-")


class TestExports:
    def test_requires_admin(self, client):
        assert client.get("/api/export/contractors").status_code == 401

    def test_contractors_export(self, client, admin_headers):
        response = client.get("/api/export/contractors", headers=admin_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/csv; charset=utf-8"
        assert 'filename="contractors.csv"' in response.headers["content-disposition"]
        assert response.content.startswith("\ufeff".encode("utf-8"))

    def test_rankings_export(self, client, admin_headers):
        upload_month(client, admin_headers, "1,Avery Quinn,Aug-25,95,100,95")
        response = client.get("/api/export/rankings/Aug-25", headers=admin_headers)
        lines = response.content.decode("utf-8-sig").split("\n")
        assert lines == ["Rank,Contractor ID,Name,Month,Productive Hours", "1,1,Avery Quinn,Aug-25,95.00"]

    def test_under_performers_export(self, client, admin_headers):
        upload_month(client, admin_headers, "3,Riley Park,Aug-25,40,42,95.2")
        response = client.get("/api/export/under-performers/Aug-25", headers=admin_headers)
        lines = response.content.decode("utf-8-sig").split("\n")
        assert lines[1] == "3,Riley Park,Aug-25,40.00,95.2,Part Time < 50h"
