import random

from order_services.action_log import ActionLog
from order_services.errors import MissingCustomer
from order_services.faults import FaultInjector
from order_services.models import OrderRequest, PaymentResult


class PaymentService:
	name = 'payment'

	def __init__(
		self,
		faults: FaultInjector,
		transaction_id_limit: int = 100,
		rng: random.Random | None = None,
	):
		self.faults = faults
		self.transaction_id_limit = transaction_id_limit
		self.rng = rng or random.Random()

	async def process(self, order: OrderRequest, log: ActionLog) -> PaymentResult | None:
		"""Charge an order, or acknowledge an undo with no result.

		Raises MissingCustomer for an empty customer and the injector's
		failure (PaymentFailed) while the retry demo is still failing.
		"""
		if order.is_undo:
			log.info(
				f'undo payment {order.customer} ({log.action_id}), '
				f'transaction id: {order.transaction_ref}'
			)
			return None

		log.info(
			f'running payment for {order.customer} ({log.action_id}), '
			f'transaction id: {order.transaction_ref}'
		)

		if not order.customer:
			raise MissingCustomer()

		processed = await self.faults.apply(order.customer, order.attempt_key, log)

		result = PaymentResult(
			succeeded=processed,
			transaction_id=self.rng.randrange(self.transaction_id_limit),
		)

		log.info(f'payment request for customer {order.customer}: {str(processed).lower()}')
		return result
