import pytest
import pytest_asyncio
from lifeguard_portal.client import PortalClient
from lifeguard_portal.config import Settings
from lifeguard_portal.events import EventBus
from lifeguard_portal.resources import PortalAPI

BASE_URL = "https://portal.test"


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=BASE_URL)


@pytest_asyncio.fixture
async def api(settings):
    client = PortalClient(settings)
    yield PortalAPI(client)
    await client.aclose()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def confirm_yes():
    prompts: list[str] = []

    def confirm(message: str) -> bool:
        prompts.append(message)
        return True

    confirm.prompts = prompts
    return confirm


@pytest.fixture
def alerts():
    return []
