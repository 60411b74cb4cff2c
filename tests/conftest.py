pytest_plugins = ["pytester", "fixturekit.testing.pytest_plugin"]
