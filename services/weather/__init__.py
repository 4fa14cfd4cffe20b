"""External provider clients: ViaCEP (CEP -> city) and WeatherAPI (city -> temperature)."""
