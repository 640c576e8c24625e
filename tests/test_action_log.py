import logging

import pytest

from order_services.action_log import ActionLog
from order_services.errors import LoggerInitFailed

logger = logging.getLogger("tests.action_log")


@pytest.mark.asyncio
async def test_open_requires_action_id_when_shipping(shipper):
    with pytest.raises(LoggerInitFailed) as exc:
        ActionLog.open(logger, "", "payment", shipper)

    assert exc.value.code == "io.direktiv.logger"


def test_open_without_shipper_accepts_missing_action_id():
    log = ActionLog.open(logger, "", "payment")

    log.info("payment request")

    assert log.lines == []


def test_log_records_carry_action_id(caplog):
    log = ActionLog.open(logger, "aid-7", "shipping")

    with caplog.at_level(logging.INFO, logger="tests.action_log"):
        log.info("shipping request")

    record = caplog.records[-1]
    assert record.action_id == "aid-7"
    assert record.service == "shipping"


@pytest.mark.asyncio
async def test_flush_ships_buffered_lines_once(shipper, sidecar_requests):
    log = ActionLog.open(logger, "aid-8", "payment", shipper)

    log.info("payment request")
    log.debug("customer %s", "Alice")
    await log.flush()
    await log.flush()

    assert len(sidecar_requests) == 1
    assert sidecar_requests[0].url.params["aid"] == "aid-8"
    assert sidecar_requests[0].content == b"payment request\ncustomer Alice\n"
    assert log.lines == []
