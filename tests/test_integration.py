"""Integration tests for URL shortener."""

import pytest
import httpx

from app import build_service
from config import Config
from web_app import create_app
from shortlinks.common.logging_config import setup_logging


@pytest.mark.asyncio
class TestIntegration:
    """End-to-end integration tests."""

    async def test_full_url_lifecycle(self):
        """Test complete URL shortening lifecycle."""
        logger = setup_logging(level="DEBUG")
        config = Config(base_url="http://testserver", short_code_length=8)

        app = create_app(service_instance=build_service(config, logger), config=config)
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            # 1. Create short URL via API
            create_response = await client.post(
                "/shorturls",
                json={"url": "https://example.com/test", "validity": 10}
            )
            assert create_response.status_code == 201
            short_code = create_response.json()["shortLink"].rsplit("/", 1)[-1]
            assert len(short_code) == 8

            # 2. No clicks yet
            stats_response = await client.get(f"/shorturls/{short_code}/stats")
            assert stats_response.status_code == 200
            assert stats_response.json()["totalClicks"] == 0

            # 3. Access short URL (redirect)
            for _ in range(3):
                redirect_response = await client.get(f"/shorturls/{short_code}")
                assert redirect_response.status_code == 301
                assert redirect_response.headers["location"] == "https://example.com/test"

            # 4. Verify clicks recorded
            stats = (await client.get(f"/shorturls/{short_code}/stats")).json()
            assert stats["totalClicks"] == 3
            assert stats["analytics"]["recentClicks24h"] == 3
            assert sum(stats["analytics"]["hourlyBreakdown"].values()) == 3
            assert len(stats["recentActivity"]) == 3

            # 5. Summary reflects the same totals
            summary = (await client.get("/shorturls/stats/summary")).json()["statistics"]
            assert summary["totalUrls"] == 1
            assert summary["activeUrls"] == 1
            assert summary["totalClicks"] == 3
            assert summary["avgClicksPerUrl"] == 3.0

    async def test_custom_code_workflow(self):
        """Test workflow with custom code."""
        logger = setup_logging(level="DEBUG")
        config = Config(base_url="http://testserver")

        app = create_app(service_instance=build_service(config, logger), config=config)
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            custom_code = "abc"
            response = await client.post(
                "/shorturls",
                json={"url": "https://github.com/user/repo", "shortcode": custom_code}
            )
            assert response.status_code == 201

            # Verify redirect works
            redirect = await client.get(f"/shorturls/{custom_code}")
            assert redirect.status_code == 301

            # Try to create duplicate (should fail)
            duplicate = await client.post(
                "/shorturls",
                json={"url": "https://different-url.com", "shortcode": custom_code}
            )
            assert duplicate.status_code == 400
            assert duplicate.json()["error"] == "Bad Request"
