"""Fixtures for verification of managed cluster policy through impersonated principals"""

import pytest

from rbacsuite.capabilities import is_openshift
from rbacsuite.harness import (
    ExpectationEvaluator,
    IdentityProvisioner,
    ImpersonationContext,
    ResourceOperationExecutor,
    ScenarioRunner,
)


@pytest.fixture(scope="session")
def harness_config(testconfig):
    """Harness section of the settings"""
    return testconfig["harness"]


@pytest.fixture(scope="session")
def elevated_group(harness_config):
    """Group whose members are allowed to modify protected resources"""
    return harness_config["elevated_group"]


@pytest.fixture(scope="module")
def provisioner(cluster, harness_config, label, skip_or_fail):
    """Provisioner of ephemeral users, labels them with the testrun label"""
    if not is_openshift():
        skip_or_fail("Ephemeral identities require OpenShift user.openshift.io API")
    return IdentityProvisioner(cluster, harness_config["identity_domain"], labels={"app": label})


@pytest.fixture(scope="module")
def executor(cluster, harness_config):
    """Executor bounded by the configured polling timeout"""
    return ResourceOperationExecutor(cluster, harness_config["polling_timeout"], harness_config["dry_run"])


@pytest.fixture
def impersonation():
    """Fresh impersonation context for every test"""
    return ImpersonationContext()


@pytest.fixture
def runner(cluster, provisioner, executor, impersonation):
    """Runner owning the impersonation context of the test"""
    return ScenarioRunner(cluster, provisioner, executor, impersonation, ExpectationEvaluator())
