import logging
import time
from contextlib import asynccontextmanager


@asynccontextmanager
async def measure(log: logging.Logger | logging.LoggerAdapter, operation: str, **context):
	start = time.perf_counter()
	try:
		yield
	finally:
		duration_ms = (time.perf_counter() - start) * 1000
		log.info(
			f'{operation} completed',
			extra={'operation': operation, 'duration_ms': round(duration_ms, 2), **context},
		)
