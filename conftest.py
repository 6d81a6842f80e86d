"""Root conftest for the test suite.

It holds no fixtures. Its presence makes pytest insert the checkout root
into ``sys.path`` (rootdir conftest insertion), which is what lets the tests
import the package as ``src.…`` without installing it first.
"""
