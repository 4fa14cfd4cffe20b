"""Environment-driven configuration for the CEP weather services."""
