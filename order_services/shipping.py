from order_services.action_log import ActionLog
from order_services.errors import MissingCustomer
from order_services.faults import FaultInjector
from order_services.models import OrderRequest


class ShippingService:
	name = 'shipping'

	def __init__(self, faults: FaultInjector):
		self.faults = faults

	async def process(self, order: OrderRequest, log: ActionLog) -> bool:
		log.info(f'executing shipping {order.customer} ({log.action_id})')

		if not order.customer:
			raise MissingCustomer()

		shipped = await self.faults.apply(order.customer, order.attempt_key, log)

		log.info(f'shipping request for customer {order.customer}: {str(shipped).lower()}')
		return shipped
