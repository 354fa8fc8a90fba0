"""tb-install

Command-line installer/upgrader for the ThingsBoard Cassandra data store.
It resolves the tool's layered configuration, bootstraps a connection to the
Cassandra cluster and hands the live session to the schema/data installer.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
