"""
Tests for the dashboard analytics endpoints.
"""


class TestAnalytics:

    def test_dashboard(self, client, seed_data, auth_headers):
        response = client.get("/api/analytics/dashboard", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {
            "totalUsers": 6,
            "totalTrainers": 2,
            "totalClients": 3,
            "totalAppointments": 3,
            "totalFeedbacks": 2,
            "averageRating": 4.5,
            "unassignedClients": 1,
            "recentRegistrations": 6,
        }

    def test_dashboard_empty(self, client, db_session, auth_headers):
        data = client.get("/api/analytics/dashboard", headers=auth_headers).json()["data"]
        assert data["totalUsers"] == 0
        assert data["averageRating"] == 0.0

    def test_users_by_role(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/users", headers=auth_headers).json()["data"]
        assert data["usersByRole"] == [
            {"role": "ADMIN", "count": 1},
            {"role": "CLIENT", "count": 3},
            {"role": "TRAINER", "count": 2},
        ]

    def test_user_growth(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/users/growth?days=7", headers=auth_headers).json()["data"]
        assert data["period"]["days"] == 7
        assert sum(day["count"] for day in data["daily"]) == 6

    def test_trainers(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/trainers", headers=auth_headers).json()["data"]
        assert [t["name"] for t in data["topTrainers"]] == ["Sarah Smith", "Mike Johnson"]
        assert data["topTrainers"][0]["averageRating"] == 5.0

    def test_clients(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/clients", headers=auth_headers).json()["data"]
        assert data["withTrainer"] == 2
        assert data["unassigned"] == 1
        assert data["clientsWithProgress"] == 2
        assert data["activeClients"] == 2
        assert data["inactiveClients"] == 1

    def test_appointments(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/appointments", headers=auth_headers).json()["data"]
        assert data["totalAppointments"] == 3
        assert data["completionRate"] == 33.33
        assert data["upcomingAppointments"] == 2

    def test_appointment_trends_range(self, client, seed_data, auth_headers):
        response = client.get("/api/analytics/appointments/trends?days=400", headers=auth_headers)
        assert response.status_code == 400

    def test_system_health(self, client, seed_data, auth_headers):
        data = client.get("/api/analytics/system/health", headers=auth_headers).json()["data"]
        assert data["health"] == "healthy"
        assert data["database"]["counts"]["mealPlans"] == 1
        assert data["database"]["counts"]["notifications"] == 2
