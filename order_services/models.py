from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from order_services.errors import MalformedRequest

UNDO_ACTION = 'undo'


def fold_keys(data, names: dict[str, str]):
	"""Map object keys onto wire names case-insensitively; an exact key wins."""
	if not isinstance(data, dict):
		return data

	folded = {}
	for key, value in data.items():
		name = names.get(key.lower(), key) if isinstance(key, str) else key
		if name != key and name in data:
			continue
		folded[name] = value
	return folded


class LineItem(BaseModel):
	model_config = ConfigDict(populate_by_name=True, strict=True)

	product_id: int = Field(0, alias='productID')
	quantity: int = 0

	@model_validator(mode='before')
	@classmethod
	def match_keys(cls, data):
		return fold_keys(data, {'productid': 'productID', 'quantity': 'quantity'})


class OrderRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True, extra='ignore', strict=True)

	customer: str = ''
	transaction_ref: str = Field('', alias='transaction')
	line_items: list[LineItem] = Field(default_factory=list, alias='order')
	action: str = ''

	@model_validator(mode='before')
	@classmethod
	def match_keys(cls, data):
		return fold_keys(
			data,
			{'customer': 'customer', 'transaction': 'transaction', 'order': 'order', 'action': 'action'},
		)

	@field_validator('customer', 'transaction_ref', 'action', mode='before')
	@classmethod
	def null_as_empty(cls, v):
		return '' if v is None else v

	@field_validator('line_items', mode='before')
	@classmethod
	def null_as_no_items(cls, v):
		return [] if v is None else v

	@property
	def is_undo(self) -> bool:
		return self.action == UNDO_ACTION

	@property
	def attempt_key(self) -> str:
		return f'{self.customer}:{self.transaction_ref}'


class PaymentResult(BaseModel):
	"""Outcome of a charge. ``transaction_id`` is in [0, transaction_id_limit), never above 99."""

	model_config = ConfigDict(populate_by_name=True)

	succeeded: bool = Field(..., alias='result')
	transaction_id: int = Field(..., ge=0, lt=100, alias='transactionID')


def decode_order(body: bytes) -> OrderRequest:
	try:
		return OrderRequest.model_validate_json(body)
	except ValidationError as e:
		details = '; '.join(
			f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
			for error in e.errors()
		)
		raise MalformedRequest(f'invalid order request: {details}') from e
