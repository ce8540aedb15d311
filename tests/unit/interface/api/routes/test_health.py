"""Unit tests for the health endpoint."""


class TestHealthCheck:
    """Tests for GET /health."""

    def test_reports_healthy(self, api):
        """Service answers with its environment and build."""
        response = api.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "environment" in body
        assert "git_sha" in body
