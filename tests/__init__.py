"""tb-install test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Several layers wired together against temporary config files.
- e2e/          : The `tb-install` command driven through Click's CliRunner.
- fixtures/     : Shared fakes and fixtures (no tests here), loaded as plugins.

General guidance
- No test talks to a live Cassandra; the driver is replaced by fakes at the
  `ClusterConnector` seam or at the driver's `Cluster` factory.
- Time is faked for the retry loop; no test sleeps.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
