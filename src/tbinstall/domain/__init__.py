"""Domain layer for tb-install.

Pure value objects and rules: parsed command-line arguments, operating modes,
cluster bootstrap configuration and consistency levels. Nothing in this
package performs I/O or imports the Cassandra driver.
"""
