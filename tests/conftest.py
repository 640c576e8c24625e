import logging
import random

import httpx
import pytest

from order_services.action_log import ActionLog, SidecarShipper
from order_services.api import create_payment_api, create_shipping_api
from order_services.attempts import AttemptCounter
from order_services.config import Config
from order_services.faults import FaultBehavior, FaultRule


@pytest.fixture
def config():
    return Config(
        sidecar_log_url=None,
        payment_faults=[
            FaultRule(customer="Johnny Patience", behavior=FaultBehavior.DELAY, delay_seconds=0.3),
            FaultRule(customer="Johnny No-Cash", behavior=FaultBehavior.DECLINE),
            FaultRule(customer="Pay Retry", behavior=FaultBehavior.RETRY, succeed_every=3),
        ],
        shipping_faults=[
            FaultRule(customer="Johnny Mars", behavior=FaultBehavior.DECLINE),
        ],
    )


@pytest.fixture
def action_log():
    return ActionLog(logging.getLogger("tests"), "aid-test", "test")


@pytest.fixture
def counter():
    return AttemptCounter()


@pytest.fixture
def sidecar_requests():
    return []


@pytest.fixture
async def shipper(sidecar_requests):
    def handler(request: httpx.Request):
        sidecar_requests.append(request)
        return httpx.Response(200)

    sidecar = SidecarShipper("http://sidecar.test/log", transport=httpx.MockTransport(handler))
    yield sidecar
    await sidecar.close()


@pytest.fixture
async def payment_client(config, counter):
    app = create_payment_api(config, counter=counter, rng=random.Random(7))
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://payment.test"
    ) as client:
        yield client


@pytest.fixture
async def shipping_client(config):
    app = create_shipping_api(config)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://shipping.test"
    ) as client:
        yield client


@pytest.fixture
async def logged_payment_client(config, counter, shipper):
    app = create_payment_api(config, shipper=shipper, counter=counter)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://payment.test"
    ) as client:
        yield client
