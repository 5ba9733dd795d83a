"""Bootstrap (composition root) for AGENDA.

Assembles the application at runtime: builds the repositories, clock and
settings, binds them to the service-layer handlers, and composes the
message bus.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `agenda.adapters`, `agenda.service_layer`,
  `agenda.interfaces`, `agenda.domain`, and `agenda.config`.
- Inner layers must not import `agenda.bootstrap`.

No business rules live here; this is assembly only.
"""

from .bootstrap import AppContainer, bootstrap, bootstrap_in_memory

__all__ = ["AppContainer", "bootstrap", "bootstrap_in_memory"]
