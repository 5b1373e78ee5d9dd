"""Root conftest"""

import signal

import pytest

from rbacsuite.capabilities import has_cluster
from rbacsuite.config import settings
from rbacsuite.utils import randomize, _whoami


def pytest_addoption(parser):
    """Add options to include various kinds of tests in testrun"""
    parser.addoption(
        "--enforce", action="store_true", default=False, help="Fails tests instead of skip, if capabilities are missing"
    )


def pytest_runtest_setup(item):
    """
    Skip or fail tests based on available capabilities and marks
    First round of filtering is usually done by pytest through -m option
    (https://docs.pytest.org/en/latest/example/markers.html#marking-test-functions-and-selecting-them-for-a-run)
    In this function we skip or fail the tests that were selected but their capabilities are not available
    """
    marks = [i.name for i in item.iter_markers()]
    skip_or_fail = pytest.fail if item.config.getoption("--enforce") else pytest.skip
    if "cluster" in marks:
        connected, error = has_cluster()
        if not connected:
            skip_or_fail(f"Unable to run cluster tests: {error}")


def pytest_collection_modifyitems(session, config, items):  # pylint: disable=unused-argument
    """
    Add user properties to testcases for xml output

    This adds issue and issue-id properties to junit output, utilizes
    pytest.mark.issue marker.

    This is copied from pytest examples to record custom properties in junit
    https://docs.pytest.org/en/stable/usage.html
    """

    for item in items:
        for marker in item.iter_markers(name="issue"):
            issue = marker.args[0]
            item.user_properties.append(("issue", issue))


@pytest.fixture(scope="session")
def skip_or_fail(request):
    """Skips or fails tests depending on --enforce option"""
    return pytest.fail if request.config.getoption("--enforce") else pytest.skip


@pytest.fixture(scope="session", autouse=True)
def term_handler():
    """
    This will handle ^C, cleanup won't be skipped
    https://github.com/pytest-dev/pytest/issues/9142
    """
    orig = signal.signal(signal.SIGTERM, signal.getsignal(signal.SIGINT))
    yield
    signal.signal(signal.SIGTERM, orig)


@pytest.fixture(scope="session")
def testconfig():
    """Testsuite settings"""
    return settings


@pytest.fixture(scope="session")
def blame(request):
    """Returns function that will add random identifier to the name"""
    if "tester" in settings:
        user = settings["tester"]
    else:
        user = _whoami()

    def _blame(name: str, tail: int = 3) -> str:
        """Create 'scoped' name within given test

        This returns unique name for object(s) to avoid conflicts

        Args:
            :param name: Base name, e.g. 'user'
            :param tail: length of random suffix"""

        nodename = request.node.name
        if nodename.startswith("test_"):
            nodename = nodename[5:]

        context = nodename.lower().split("_")[0]
        if len(context) > 2:
            context = context[:2] + context[2:-1].translate(str.maketrans("", "", "aiyu")) + context[-1]

        if "." in context:
            context = context.split(".")[0]

        return randomize(f"{name[:8]}-{user[:8]}-{context[:9]}", tail=tail)

    return _blame


@pytest.fixture(scope="session")
def label(blame):
    """Session scope label for all resources"""
    return blame("testrun")


@pytest.fixture(scope="session")
def cluster(testconfig):
    """Administrative Kubernetes client"""
    client = testconfig["control_plane"]["cluster"]
    if not client.connected:
        pytest.fail("You are not logged into Kubernetes or the configured namespace doesn't exist")
    return client
