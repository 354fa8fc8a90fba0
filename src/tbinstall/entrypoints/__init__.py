"""Entrypoints (inbound adapters) for tb-install.

Expose the install tool to the outside world: today a single CLI command.
Parse and validate inputs, call the bootstrap/service layer, and present
results.

Dependency rule: may import `tbinstall.bootstrap` and `tbinstall.service_layer`;
avoid importing `tbinstall.adapters` directly.
"""
