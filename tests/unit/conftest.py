# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Fixtures for Jenkins credentials provider unit tests."""

import typing
import unittest.mock
from secrets import token_hex

import jenkinsapi.jenkins
import jenkinsapi.utils.requester
import pytest

import jenkins
from state import ProviderConfig, ResourceData

from .helpers import BASE_URL
from .jenkins_mock import MockedCredentialsManager

PROVIDER_ENV = {
    "JENKINS_URL": BASE_URL,
    "JENKINS_USERNAME": "admin",
    "JENKINS_PASSWORD": "admin-token",
}


@pytest.fixture(scope="function", name="mock_client")
def mock_client_fixture() -> unittest.mock.MagicMock:
    """Mock Jenkins API client with a mocked requester."""
    mock_client = unittest.mock.MagicMock(spec=jenkinsapi.jenkins.Jenkins)
    mock_client.baseurl = BASE_URL
    mock_client.requester = unittest.mock.MagicMock(spec=jenkinsapi.utils.requester.Requester)
    return mock_client


@pytest.fixture(scope="function", name="credentials_manager")
def credentials_manager_fixture(
    mock_client: unittest.mock.MagicMock,
) -> jenkins.CredentialsManager:
    """Credentials manager over the mocked Jenkins API client."""
    return jenkins.CredentialsManager(mock_client)


@pytest.fixture(scope="function", name="mocked_manager")
def mocked_manager_fixture() -> MockedCredentialsManager:
    """In-memory credentials store."""
    return MockedCredentialsManager()


@pytest.fixture(scope="function", name="username_data")
def username_data_fixture() -> ResourceData:
    """Declared username with password credential without identity."""
    return ResourceData(
        fields={"username": "alice", "password": token_hex(8), "description": "deploy user"}
    )


@pytest.fixture(scope="function", name="secret_data")
def secret_data_fixture() -> ResourceData:
    """Declared secret text credential without identity."""
    return ResourceData(fields={"secret": token_hex(16), "description": "registry token"})


@pytest.fixture(scope="function", name="provider_env")
def provider_env_fixture(monkeypatch: pytest.MonkeyPatch) -> typing.Dict[str, str]:
    """Environment with the required provider configuration."""
    for name, value in PROVIDER_ENV.items():
        monkeypatch.setenv(name, value)
    for name in (
        "JENKINS_CREDENTIALS_DOMAIN",
        "JENKINS_CREDENTIALS_SCOPE",
        "JENKINS_TIMEOUT",
        "JENKINS_SSL_VERIFY",
    ):
        monkeypatch.delenv(name, raising=False)
    return PROVIDER_ENV


@pytest.fixture(scope="function", name="provider_config")
def provider_config_fixture() -> ProviderConfig:
    """Provider configuration."""
    # Mypy doesn't understand str is supposed to be converted to HttpUrl by Pydantic.
    return ProviderConfig(
        server_url=BASE_URL,  # type: ignore
        username="admin",
        password_or_token="admin-token",
    )
