"""Global pytest fixtures for tb-install."""

pytest_plugins = [
    "tests.fixtures.cluster",
    "tests.fixtures.config_files",
]
