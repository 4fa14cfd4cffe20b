"""
App services module – Centralized service layer for business logic.

Contains the two pipeline stages:
- weather_service: resolver stage (CEP -> city -> weather -> unit conversion)
- gateway_service: gateway stage (request validation and relay to the resolver)
"""
