"""Interfaces (ports) for tb-install.

Abstract contracts implemented by the adapters: property sources, resources,
the cluster connector, the installer and the redactor. The service layer and
the composition root depend on these, never on concrete adapters.
"""
