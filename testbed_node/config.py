# testbed_node/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NodeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Node Identity
    NODE_ID: str = "testbed-node-01"

    # Network Configuration
    COAP_HOST: str = "::"
    COAP_PORT: int = 5683

    # Resources
    ENABLE_SENSORS: bool = True

    # Self-advertising towards the display node
    ADVERTISE_ENABLED: bool = False
    ADVERTISE_HOST: str = "ff02::1"
    ADVERTISE_PORT: int = 6666
    ADVERTISE_PATH: str = "devices"
    ADVERTISE_INTERVAL: float = 10.0
    ADVERTISE_TIMEOUT: float = 2.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    @field_validator("COAP_PORT", "ADVERTISE_PORT")
    @classmethod
    def check_port(cls, value: int) -> int:
        if not 1 <= value <= 65535:
            raise ValueError(f"port {value} out of range (1-65535)")
        return value

    @field_validator("ADVERTISE_INTERVAL", "ADVERTISE_TIMEOUT")
    @classmethod
    def check_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def advertise_uri(self) -> str:
        host = self.ADVERTISE_HOST
        if ":" in host:
            # IPv6 literal, zone id needs percent-encoding inside the brackets
            host = "[" + host.replace("%", "%25") + "]"
        return f"coap://{host}:{self.ADVERTISE_PORT}/{self.ADVERTISE_PATH.strip('/')}"
