import argparse
import asyncio
import uuid

import httpx

DEMO_CUSTOMERS = ['Alice', 'Johnny Patience', 'Johnny No-Cash', 'Pay Retry', 'Johnny Mars', '']


def build_order(customer: str, transaction: str) -> dict:
	return {
		'customer': customer,
		'transaction': transaction,
		'order': [{'productID': 1, 'quantity': 2}, {'productID': 7, 'quantity': 1}],
	}


async def send_test_orders(payment_url: str, shipping_url: str, repeat: int):
	async with httpx.AsyncClient(timeout=180.0) as client:
		for customer in DEMO_CUSTOMERS:
			transaction = f'TX-DEMO-{uuid.uuid4().hex[:8]}'
			order = build_order(customer, transaction)

			for url in (payment_url, shipping_url):
				for attempt in range(repeat):
					response = await client.post(
						url, json=order, headers={'Direktiv-ActionID': f'{transaction}-{attempt}'}
					)
					error = response.headers.get('Direktiv-ErrorCode')
					if error:
						outcome = f'{error}: {response.headers.get("Direktiv-ErrorMessage")}'
					else:
						outcome = response.text or '<empty>'
					print(f'{url} customer={customer!r} attempt={attempt + 1}: {outcome}')

	print('All orders sent!')


if __name__ == '__main__':
	parser = argparse.ArgumentParser(description='Send demo orders to the order services')
	parser.add_argument('--payment-url', default='http://localhost:8080/')
	parser.add_argument('--shipping-url', default='http://localhost:8081/')
	parser.add_argument('--repeat', type=int, default=3, help='Calls per customer and service')
	args = parser.parse_args()

	asyncio.run(send_test_orders(args.payment_url, args.shipping_url, args.repeat))
