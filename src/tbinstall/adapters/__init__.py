"""Adapters implementing the tb-install interfaces.

Property sources and loaders for the layered configuration, the resource
loader for ``classpath:``/``file:`` locations, the Cassandra driver connector,
the default installer and the regex-based redactor.
"""
