import argparse
import logging
import sys

import uvicorn
from pythonjsonlogger import json as json_logger

from order_services.api import SERVICES
from order_services.config import get_settings

handler = logging.StreamHandler(sys.stdout)
formatter = json_logger.JsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
handler.setFormatter(formatter)

logging.basicConfig(level=logging.INFO, handlers=[handler])
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description='Run a simulated order service')
	parser.add_argument('service', choices=sorted(SERVICES), help='Which handler to serve')
	parser.add_argument('--host', default=None, help='Bind address (default: HOST setting)')
	parser.add_argument('--port', type=int, default=None, help='Bind port (default: PORT setting)')
	return parser.parse_args(argv)


def main(argv: list[str] | None = None):
	args = parse_args(argv)
	config = get_settings()
	logging.getLogger().setLevel(config.log_level)

	app = SERVICES[args.service](config)
	host = args.host or config.host
	port = args.port or config.port

	logger.info(f'Starting {args.service} service on {host}:{port}')
	if config.sidecar_log_url:
		logger.info(f'Shipping action logs to {config.sidecar_log_url}')

	uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower(), log_config=None)


if __name__ == '__main__':
	main()
