# config.py
import os
from dataclasses import dataclass

DEFAULTS = {
    "SOAP_ENDPOINT_URL": "http://localhost:8080/ws",
    "SOAP_ACTION": "http://local/gs-producing-web-service/GetCountryRequest",
    "SOAP_VERSION": "1.1",
    "SOAP_TIMEOUT": "10",
    "HTTP_HOST": "0.0.0.0",
    "HTTP_PORT": "8000",
    "LOG_LEVEL": "INFO",
}


@dataclass(frozen=True)
class Settings:
    soap_endpoint_url: str
    soap_action: str
    soap_version: str
    soap_timeout: float
    http_host: str
    http_port: int
    log_level: str


# ---------------------------------------------------
# Load config from an external properties file
# ---------------------------------------------------
def load_properties(filename):
    cfg = {}
    if not filename or not os.path.exists(filename):
        return cfg
    with open(filename, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, value = line.split("=", 1)
            cfg[key.strip()] = value.strip()
    return cfg


def load_settings(filename="gateway.properties", environ=None):
    """Defaults, then the properties file, then environment variables."""
    environ = os.environ if environ is None else environ
    cfg = dict(DEFAULTS)
    cfg.update(load_properties(filename))
    for key in DEFAULTS:
        if key in environ:
            cfg[key] = environ[key]

    return Settings(
        soap_endpoint_url=cfg["SOAP_ENDPOINT_URL"],
        soap_action=cfg["SOAP_ACTION"],
        soap_version=_soap_version(cfg["SOAP_VERSION"]),
        soap_timeout=float(cfg["SOAP_TIMEOUT"]),
        http_host=cfg["HTTP_HOST"],
        http_port=int(cfg["HTTP_PORT"]),
        log_level=cfg["LOG_LEVEL"].upper(),
    )


def _soap_version(value):
    if value not in ("1.1", "1.2"):
        raise ValueError(f"SOAP_VERSION must be 1.1 or 1.2, got {value!r}")
    return value
