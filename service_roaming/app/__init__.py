"""
Roaming Service package for the Roaming Access Gateway.

The service fronts playurl requests from mobile clients, enforcing:
- Authentication: access keys are resolved to accounts via the platform's
  signed account-info endpoint, with an in-memory identity cache
- Authorization: resolved accounts must be on the configured allow-list
- Relay: authorized requests are forwarded upstream and the body is
  returned verbatim

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: HTTP client for the upstream API.
- app.caching: Identity cache.
- app.domain: Credentials, signing, allow-list and request pipeline.
"""
