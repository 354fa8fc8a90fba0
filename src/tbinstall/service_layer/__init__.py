"""Service layer for tb-install.

Use cases built on the domain and the interfaces: layered configuration
resolution (`configuration_resolver`, `environment`), the cluster bootstrap
with bounded retry (`bootstrapper`) and the install/upgrade run (`install`).
"""
