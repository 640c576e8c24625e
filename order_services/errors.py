ACTION_ID_HEADER = 'Direktiv-ActionID'
ERROR_CODE_HEADER = 'Direktiv-ErrorCode'
ERROR_MESSAGE_HEADER = 'Direktiv-ErrorMessage'


class ServiceError(Exception):
	"""Terminal request error, reported to the caller as a dotted code and a message."""

	code = 'io.direktiv.internal'
	default_message = 'internal error'

	def __init__(self, message: str | None = None):
		self.message = message or self.default_message
		super().__init__(self.message)

	@property
	def headers(self) -> dict[str, str]:
		# header values must stay on one line
		message = ' '.join(self.message.split())
		return {ERROR_CODE_HEADER: self.code, ERROR_MESSAGE_HEADER: message}


class LoggerInitFailed(ServiceError):
	code = 'io.direktiv.logger'
	default_message = 'could not create action logger'


class MalformedRequest(ServiceError):
	code = 'io.direktiv.data'
	default_message = 'malformed request body'


class MissingCustomer(ServiceError):
	code = 'io.direktiv.customer'
	default_message = 'no customer provided'


class InternalEncodingFailed(ServiceError):
	code = 'io.direktiv.internal'
	default_message = 'could not encode result'


class PaymentFailed(ServiceError):
	code = 'io.direktiv.customer'
	default_message = 'payment failed'


class ShippingFailed(ServiceError):
	code = 'io.direktiv.customer'
	default_message = 'shipping failed'
