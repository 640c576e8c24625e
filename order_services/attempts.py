import asyncio
from collections import defaultdict


class AttemptCounter:
	"""In-memory attempt counts for the retry demo, one count per key.

	Keys are normally ``customer:transaction`` so a caller retrying one
	transaction never advances the count of another.
	"""

	def __init__(self):
		self._counts: dict[str, int] = defaultdict(int)
		self._lock = asyncio.Lock()

	async def increment(self, key: str) -> int:
		async with self._lock:
			self._counts[key] += 1
			return self._counts[key]

	def get(self, key: str) -> int:
		return self._counts.get(key, 0)
