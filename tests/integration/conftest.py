"""Integration test fixtures (service checks and prerequisites).

Most integration tests run the whole stage chain offline against the
scripted client. The few that talk to the real Messages API are skipped
unless ANTHROPIC_API_KEY is set and the service answers.
"""

import os

import httpx
import pytest

from ai_risk_reporting.config import Settings
from ai_risk_reporting.llm.anthropic_client import AnthropicClient


@pytest.fixture(scope="session")
def live_settings() -> Settings:
    """Settings from the environment; skips when no API key is configured."""
    if not os.environ.get("ANTHROPIC_API_KEY"):
        pytest.skip("ANTHROPIC_API_KEY not set")
    return Settings()


@pytest.fixture(scope="session")
def check_anthropic(live_settings):
    """Check the Messages API is reachable with the configured key.

    Skips tests if the service cannot be reached or rejects the key.
    """
    try:
        response = httpx.get(
            f"{live_settings.ANTHROPIC_BASE_URL}/v1/models",
            headers={
                "x-api-key": live_settings.ANTHROPIC_API_KEY,
                "anthropic-version": live_settings.ANTHROPIC_VERSION,
            },
            timeout=10,
        )
    except httpx.HTTPError as e:
        pytest.skip(f"Messages API not available: {e}")
    if response.status_code != 200:
        pytest.skip(f"Messages API not available (status {response.status_code})")


@pytest.fixture
def live_anthropic_client(live_settings, check_anthropic) -> AnthropicClient:
    """Real AnthropicClient for integration tests.

    Requires a valid key (checked by check_anthropic fixture). Tests close
    it themselves with `async with`.
    """
    return AnthropicClient.from_settings(live_settings)
