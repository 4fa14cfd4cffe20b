"""
Configuration for the CEP weather services
"""

import os

# ViaCEP (postal code -> city) Configuration
VIACEP_BASE_URL = os.getenv("VIACEP_BASE_URL", "https://viacep.com.br/ws")

# WeatherAPI Configuration
WEATHERAPI_URL = os.getenv("WEATHERAPI_URL", "http://api.weatherapi.com/v1/current.json")
WEATHERAPI_KEY = os.getenv("WEATHERAPI_KEY")

# Resolver stage, as seen from the gateway
RESOLVER_BASE_URL = os.getenv("RESOLVER_BASE_URL", "http://service-b:8081")

# Request Timeout (seconds)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Listen ports
GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", "8080"))
RESOLVER_PORT = int(os.getenv("RESOLVER_PORT", "8081"))
