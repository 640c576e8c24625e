from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_services.faults import DEFAULT_PAYMENT_FAULTS, DEFAULT_SHIPPING_FAULTS, FaultRule

# uvicorn accepts only these names
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')
LOG_LEVEL_ALIASES = {'WARN': 'WARNING', 'FATAL': 'CRITICAL'}


class Config(BaseSettings):
	host: str = '0.0.0.0'
	port: int = Field(8080, ge=1, le=65535)
	log_level: str = 'INFO'

	sidecar_log_url: str | None = None
	sidecar_timeout: float = Field(5.0, gt=0)

	transaction_id_limit: int = Field(100, ge=1, le=100)

	payment_faults: list[FaultRule] = Field(default_factory=lambda: list(DEFAULT_PAYMENT_FAULTS))
	shipping_faults: list[FaultRule] = Field(default_factory=lambda: list(DEFAULT_SHIPPING_FAULTS))

	@field_validator('log_level')
	@classmethod
	def validate_log_level(cls, v):
		level = LOG_LEVEL_ALIASES.get(v.upper(), v.upper())
		if level not in LOG_LEVELS:
			raise ValueError(f'log_level must be one of {", ".join(LOG_LEVELS)}, got {v!r}')
		return level

	@field_validator('sidecar_log_url')
	@classmethod
	def validate_sidecar_log_url(cls, v):
		if not v:
			return None
		if not v.startswith(('http://', 'https://')):
			raise ValueError("sidecar_log_url must be an http(s) URL, e.g., 'http://localhost:8889/log'")
		return v

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Config:
	return Config()
