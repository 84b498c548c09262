from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	MONOBANK_URL: str = 'https://api.monobank.ua/bank/currency'

	# Monobank refreshes its public rates at most once every 5 minutes
	REFRESH_INTERVAL_SECONDS: int = 300
	REQUEST_TIMEOUT_SECONDS: float = 10.0

	# Application
	APP_NAME: str = 'Monobank Rates'
	DEBUG: bool = True
	LOG_LEVEL: str = 'INFO'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
