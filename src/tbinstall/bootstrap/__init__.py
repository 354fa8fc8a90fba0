"""Bootstrap (composition root) for tb-install.

Assembles the tool at runtime: injects the default config name argument,
selects the operating mode, resolves the layered configuration, builds the
cluster bootstrap configuration and consistency defaults, and wires the
Cassandra connector, the bootstrapper and the installer together.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `tbinstall.adapters`, `tbinstall.service_layer`,
  `tbinstall.interfaces`, `tbinstall.domain`, and `tbinstall.config`.
- Inner layers must not import `tbinstall.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import AppContainer, bootstrap, run, update_arguments

__all__ = ["AppContainer", "bootstrap", "run", "update_arguments"]
