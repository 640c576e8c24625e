import logging

import httpx

from order_services.errors import LoggerInitFailed

logger = logging.getLogger(__name__)


class SidecarShipper:
	"""Forwards a request's log lines to the orchestrator's log sidecar."""

	def __init__(self, url: str, timeout: float = 5.0, transport: httpx.AsyncBaseTransport | None = None):
		self.url = url
		self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

	async def close(self):
		"""Close the HTTP client (call on shutdown)"""
		await self.client.aclose()

	async def ship(self, action_id: str, lines: list[str]) -> None:
		if not lines:
			return

		try:
			response = await self.client.post(
				self.url, params={'aid': action_id}, content='\n'.join(lines) + '\n'
			)
			response.raise_for_status()
		except httpx.HTTPError as e:
			logger.warning(
				f'Could not ship {len(lines)} log lines for action {action_id}: {e}',
				extra={'action_id': action_id},
			)


class ActionLog(logging.LoggerAdapter):
	"""Logger bound to one request's action id.

	Lines reach the process logger with ``action_id`` and ``service``
	extras. With a shipper attached every line, whatever the process log
	level, is also buffered and sent to the sidecar by ``flush``.
	"""

	def __init__(
		self,
		logger: logging.Logger,
		action_id: str,
		service: str,
		shipper: SidecarShipper | None = None,
	):
		super().__init__(logger, {'action_id': action_id, 'service': service})
		self.action_id = action_id
		self.shipper = shipper
		self.lines: list[str] = []

	@classmethod
	def open(
		cls,
		logger: logging.Logger,
		action_id: str,
		service: str,
		shipper: SidecarShipper | None = None,
	) -> 'ActionLog':
		if shipper is not None and not action_id:
			raise LoggerInitFailed('no action id provided')
		return cls(logger, action_id, service, shipper)

	def log(self, level, msg, *args, **kwargs):
		if self.shipper is not None:
			self.lines.append(str(msg) % args if args else str(msg))
		super().log(level, msg, *args, **kwargs)

	def process(self, msg, kwargs):
		kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
		return msg, kwargs

	async def flush(self):
		if self.shipper is None or not self.lines:
			return

		lines, self.lines = self.lines, []
		await self.shipper.ship(self.action_id, lines)
