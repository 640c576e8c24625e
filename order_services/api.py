import json
import logging
import random
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from pydantic import BaseModel

from order_services.action_log import ActionLog, SidecarShipper
from order_services.attempts import AttemptCounter
from order_services.config import Config
from order_services.errors import (
	ACTION_ID_HEADER,
	InternalEncodingFailed,
	LoggerInitFailed,
	PaymentFailed,
	ServiceError,
	ShippingFailed,
)
from order_services.faults import FaultInjector
from order_services.instrumentation import measure
from order_services.models import decode_order
from order_services.payment import PaymentService
from order_services.shipping import ShippingService

logger = logging.getLogger(__name__)


def encode_result(result: BaseModel | bool) -> bytes:
	try:
		if isinstance(result, BaseModel):
			return result.model_dump_json(by_alias=True).encode()
		return json.dumps(result).encode()
	except (TypeError, ValueError) as e:
		raise InternalEncodingFailed(str(e)) from e


def error_response(error: ServiceError) -> Response:
	return Response(status_code=200, headers=error.headers)


def create_api(
	service: PaymentService | ShippingService, shipper: SidecarShipper | None = None
) -> FastAPI:
	@asynccontextmanager
	async def lifespan(app: FastAPI):
		logger.info(f'{service.name} service ready')
		yield
		if shipper:
			await shipper.close()
		logger.info(f'{service.name} service stopped')

	app = FastAPI(
		title=f'{service.name.capitalize()} Service',
		description=f'Simulated {service.name} step for workflow orchestration demos',
		version='0.1.0',
		lifespan=lifespan,
	)

	@app.post('/')
	async def handle(request: Request):
		action_id = request.headers.get(ACTION_ID_HEADER, '')

		try:
			log = ActionLog.open(logger, action_id, service.name, shipper)
		except LoggerInitFailed as e:
			logger.error(
				f'{service.name} request rejected: {e.message}', extra={'service': service.name}
			)
			return error_response(e)

		try:
			log.info(f'{service.name} request')
			order = decode_order(await request.body())

			async with measure(log, f'{service.name}_process', customer=order.customer):
				result = await service.process(order, log)

			if result is None:
				return Response(status_code=200)

			body = encode_result(result)
			log.info(f'json result: {body.decode()}')
			return Response(content=body, media_type='application/json')

		except ServiceError as e:
			log.error(f'{service.name} request failed ({e.code}): {e.message}')
			return error_response(e)

		finally:
			await log.flush()

	@app.get('/status')
	async def get_status():
		return {
			'status': 'healthy',
			'service': service.name,
			'timestamp': datetime.now(UTC).isoformat(),
		}

	return app


def _shipper_from(config: Config) -> SidecarShipper | None:
	if not config.sidecar_log_url:
		return None
	return SidecarShipper(config.sidecar_log_url, timeout=config.sidecar_timeout)


def create_payment_api(
	config: Config,
	shipper: SidecarShipper | None = None,
	counter: AttemptCounter | None = None,
	rng: random.Random | None = None,
) -> FastAPI:
	faults = FaultInjector(config.payment_faults, failure=PaymentFailed, counter=counter)
	service = PaymentService(faults, transaction_id_limit=config.transaction_id_limit, rng=rng)
	return create_api(service, shipper or _shipper_from(config))


def create_shipping_api(
	config: Config,
	shipper: SidecarShipper | None = None,
	counter: AttemptCounter | None = None,
) -> FastAPI:
	faults = FaultInjector(config.shipping_faults, failure=ShippingFailed, counter=counter)
	return create_api(ShippingService(faults), shipper or _shipper_from(config))


SERVICES = {
	'payment': create_payment_api,
	'shipping': create_shipping_api,
}
