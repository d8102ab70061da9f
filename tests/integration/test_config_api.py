"""
Integration tests for the Snyk and LLM configuration endpoints.
"""

import httpx
import pytest

from audit_dashboard.models.enums import ConfigKind

COOKIE = "snyk-session-id"


class TestSnykConfig:
    @pytest.mark.asyncio
    async def test_get_without_config_returns_null_and_sets_cookie(self, client):
        response = await client.get("/api/config")

        assert response.status_code == 200
        assert response.json() is None
        set_cookie = response.headers["set-cookie"].lower()
        assert COOKIE in set_cookie
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie
        assert "path=/" in set_cookie
        assert "max-age=1800" in set_cookie

    @pytest.mark.asyncio
    async def test_missing_token_is_rejected(self, client):
        response = await client.post("/api/config", json={"orgId": "org-1"})

        assert response.status_code == 400
        assert response.json() == {"error": "Snyk API token is required"}

    @pytest.mark.asyncio
    async def test_failed_connectivity_check_stores_nothing(self, client, snyk):
        snyk.connection = snyk.connection.model_copy(
            update={"success": False, "message": "Invalid auth token"}
        )

        response = await client.post("/api/config", json={"snykApiToken": "bad", "orgId": "org-1"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid auth token"}

        assert (await client.get("/api/config")).json() is None

    @pytest.mark.asyncio
    async def test_save_masks_token_and_defaults_version(self, client, snyk):
        response = await client.post(
            "/api/config",
            json={"snykApiToken": "snyk-secret-token", "groupId": "grp-1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["snykApiToken"] == "***"
        assert body["groupId"] == "grp-1"
        assert body["orgId"] is None
        assert body["apiVersion"] == "2024-10-15"
        assert body["expiresInMinutes"] in (29, 30)
        assert "snyk-secret-token" not in response.text
        assert snyk.credentials == [("snyk-secret-token", "2024-10-15")]

        stored = (await client.get("/api/config")).json()
        assert stored["snykApiToken"] == "***"
        assert stored["groupId"] == "grp-1"

    @pytest.mark.asyncio
    async def test_custom_api_version_is_kept(self, client, snyk):
        await client.post(
            "/api/config",
            json={"snykApiToken": "t", "orgId": "o", "apiVersion": "2025-01-01"},
        )
        assert (await client.get("/api/config")).json()["apiVersion"] == "2025-01-01"
        assert snyk.credentials[-1] == ("t", "2025-01-01")

    @pytest.mark.asyncio
    async def test_extend_without_config_is_rejected(self, client):
        response = await client.post("/api/config/extend", json={"minutes": 30})

        assert response.status_code == 400
        assert response.json() == {"error": "No valid configuration to extend"}

    @pytest.mark.asyncio
    async def test_extend_live_config(self, configured_client):
        response = await configured_client.post("/api/config/extend", json={})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Configuration extended successfully"
        assert body["expiresInMinutes"] in (29, 30)

    @pytest.mark.asyncio
    async def test_extend_rejects_out_of_range_minutes(self, configured_client):
        response = await configured_client.post("/api/config/extend", json={"minutes": 0})

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_clear_removes_config_and_session(self, configured_client, app):
        response = await configured_client.post("/api/config/clear")

        assert response.status_code == 200
        assert response.json() == {"message": "Configuration cleared successfully"}
        assert (await configured_client.get("/api/config")).json() is None

    @pytest.mark.asyncio
    async def test_sessions_are_isolated_per_cookie(self, configured_client, app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as other:
            assert (await other.get("/api/config")).json() is None

        assert (await configured_client.get("/api/config")).json()["orgId"] == "org-1"


class TestLLMConfig:
    @pytest.mark.asyncio
    async def test_get_without_config_returns_null(self, client):
        assert (await client.get("/api/llm-config")).json() is None

    @pytest.mark.asyncio
    async def test_save_then_get_never_returns_key(self, client):
        response = await client.post(
            "/api/llm-config",
            json={"provider": " Gemini ", "model": "gemini-2.0-flash", "apiKey": "g-secret-key"},
        )

        assert response.status_code == 200
        assert response.json() == {"provider": "Gemini", "model": "gemini-2.0-flash", "configured": True}

        stored = await client.get("/api/llm-config")
        assert stored.json() == {"provider": "Gemini", "model": "gemini-2.0-flash", "configured": True}
        assert "apiKey" not in stored.json()
        assert "g-secret-key" not in stored.text

    @pytest.mark.asyncio
    async def test_missing_fields_are_rejected(self, client):
        response = await client.post("/api/llm-config", json={"provider": "openai", "model": "gpt-4o"})

        assert response.status_code == 400
        assert response.json() == {"error": "provider, model, and apiKey are required"}

    @pytest.mark.asyncio
    async def test_unknown_provider_is_rejected(self, client):
        response = await client.post(
            "/api/llm-config",
            json={"provider": "mistral", "model": "large", "apiKey": "k"},
        )

        assert response.status_code == 400
        assert "Unsupported provider 'mistral'" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_clear_keeps_snyk_config(self, configured_client):
        await configured_client.post(
            "/api/llm-config",
            json={"provider": "openai", "model": "gpt-4o", "apiKey": "sk-test"},
        )

        response = await configured_client.post("/api/llm-config/clear")

        assert response.json() == {"message": "LLM configuration cleared successfully"}
        assert (await configured_client.get("/api/llm-config")).json() is None
        assert (await configured_client.get("/api/config")).json() is not None

    @pytest.mark.asyncio
    async def test_base_url_is_stored(self, client, app):
        await client.post(
            "/api/llm-config",
            json={"provider": "custom", "model": "llama3", "apiKey": "k", "baseUrl": "http://localhost:11434/v1"},
        )

        session_id = client.cookies.get("snyk-session-id")
        config = app.state.session_store.get_config(session_id, ConfigKind.LLM)
        assert config.base_url == "http://localhost:11434/v1"


class TestDebugAndHealth:
    @pytest.mark.asyncio
    async def test_debug_sessions_are_redacted(self, configured_client):
        response = await configured_client.get("/api/debug/sessions")

        assert response.status_code == 200
        body = response.json()
        assert body["total_sessions"] == 1
        assert body["sessions"][0]["has_config"] is True
        assert "snyk-token" not in response.text

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["environment"] == "test"
