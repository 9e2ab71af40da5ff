"""Unit tests for health check routes."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException

from core.database import PoolStatus
from routes.health_routes import health, health_detailed, ready


@pytest.mark.unit
class TestHealthEndpoint:
    """Tests for GET /health."""

    async def test_health_returns_200_healthy(self):
        result = await health()
        assert result.status == "healthy"
        assert result.service == "planner-api"

    async def test_health_over_http(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "planner-api"}


@pytest.mark.unit
class TestDetailedHealthEndpoint:
    """Tests for GET /health/detailed."""

    async def test_reports_database_and_pool(self):
        request = MagicMock()
        pool = PoolStatus(pool_size=5, checked_out=1, overflow=0, checked_in=4)

        with (
            patch("routes.health_routes.check_db_connection", autospec=True),
            patch("routes.health_routes.get_pool_status", return_value=pool),
        ):
            result = await health_detailed(request)

        assert result.status == "healthy"
        assert result.database is True
        assert result.pool is not None
        assert result.pool.checked_out == 1

    async def test_unreachable_database_is_unhealthy_not_an_error(self):
        request = MagicMock()

        with (
            patch(
                "routes.health_routes.check_db_connection",
                autospec=True,
                side_effect=ConnectionRefusedError("refused"),
            ),
            patch("routes.health_routes.get_pool_status", return_value=None),
        ):
            result = await health_detailed(request)

        assert result.status == "unhealthy"
        assert result.database is False
        assert result.pool is None


@pytest.mark.unit
class TestReadyEndpoint:
    """Tests for GET /ready."""

    async def test_ready_returns_200_when_healthy(self):
        """Ready returns 200 when init_done=True and DB is reachable."""
        request = MagicMock()
        request.app.state.init_done = True

        with patch(
            "routes.health_routes.check_db_connection",
            autospec=True,
        ) as mock_check:
            result = await ready(request)

        assert result.status == "ready"
        assert result.service == "planner-api"
        mock_check.assert_awaited_once_with(request.app.state.engine)

    async def test_ready_returns_503_when_init_not_done(self):
        request = MagicMock()
        request.app.state.init_done = False

        with pytest.raises(HTTPException) as exc_info:
            await ready(request)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Starting"

    async def test_ready_returns_503_when_db_unreachable(self):
        request = MagicMock()
        request.app.state.init_done = True

        with patch(
            "routes.health_routes.check_db_connection",
            autospec=True,
            side_effect=TimeoutError(),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await ready(request)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail == "Database unavailable"
