import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel, Field

from order_services.attempts import AttemptCounter
from order_services.errors import ServiceError


class FaultBehavior(str, Enum):
	DELAY = 'delay'
	DECLINE = 'decline'
	RETRY = 'retry'


class FaultRule(BaseModel):
	customer: str = Field(..., min_length=1)
	behavior: FaultBehavior
	delay_seconds: float = Field(0.0, ge=0)
	succeed_every: int = Field(3, ge=1)


DEFAULT_PAYMENT_FAULTS = [
	FaultRule(customer='Johnny Patience', behavior=FaultBehavior.DELAY, delay_seconds=120),
	FaultRule(customer='Johnny No-Cash', behavior=FaultBehavior.DECLINE),
	FaultRule(customer='Pay Retry', behavior=FaultBehavior.RETRY, succeed_every=3),
]

DEFAULT_SHIPPING_FAULTS = [
	FaultRule(customer='Johnny Mars', behavior=FaultBehavior.DECLINE),
]


class FaultInjector:
	"""Applies a table of customer-keyed fault rules to a single request.

	Rules are matched on the exact customer name and applied in table order.
	``apply`` returns False when a decline rule matched and raises
	``failure`` when a retry rule wants the current attempt to fail.
	"""

	def __init__(
		self,
		rules: list[FaultRule],
		failure: type[ServiceError],
		counter: AttemptCounter | None = None,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self.rules = list(rules)
		self.failure = failure
		self.counter = counter or AttemptCounter()
		self.sleep = sleep

	def matching(self, customer: str) -> list[FaultRule]:
		return [rule for rule in self.rules if rule.customer == customer]

	async def apply(self, customer: str, attempt_key: str, log: logging.LoggerAdapter) -> bool:
		succeeded = True

		for rule in self.matching(customer):
			if rule.behavior is FaultBehavior.DELAY:
				log.info(f'delaying request for {customer} by {rule.delay_seconds}s')
				await self.sleep(rule.delay_seconds)

			elif rule.behavior is FaultBehavior.DECLINE:
				succeeded = False

			elif rule.behavior is FaultBehavior.RETRY:
				attempt = await self.counter.increment(attempt_key)
				if attempt % rule.succeed_every != 0:
					log.warning(
						f'simulated failure for {customer}, attempt {attempt} '
						f'(succeeds every {rule.succeed_every})'
					)
					raise self.failure()

		return succeeded
