# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Jenkins credentials provider."""

import logging
import typing

import jenkins
from credential import (
    CredentialResource,
    SecretTextCredentialResource,
    UsernamePasswordCredentialResource,
)
from state import ProviderConfig

logger = logging.getLogger(__name__)

RESOURCES: dict[str, type[CredentialResource]] = {
    resource.type_name: resource
    for resource in (UsernamePasswordCredentialResource, SecretTextCredentialResource)
}


class Provider:
    """Entry point of the orchestration host into the Jenkins credential resources.

    Attrs:
        config: The provider configuration.
        resource_types: The names of the resource types the provider serves.
    """

    def __init__(self, config: ProviderConfig):
        """Construct the provider.

        Args:
            config: The provider configuration.
        """
        self.config = config

    @classmethod
    def from_env(cls) -> "Provider":
        """Instantiate the provider configured from the environment.

        Returns:
            The provider.
        """
        return cls(ProviderConfig.from_env())

    @property
    def resource_types(self) -> typing.List[str]:
        """Get the names of the resource types the provider serves.

        Returns:
            The sorted resource type names.
        """
        return sorted(RESOURCES)

    def configure(self) -> jenkins.CredentialsManager:
        """Connect to Jenkins, the manager is passed to each resource operation.

        Returns:
            The credentials store client.
        """
        logger.info(
            "Configuring Jenkins credentials provider for %s, domain %s",
            self.config.server_url,
            self.config.domain,
        )
        client = jenkins.get_client(
            str(self.config.server_url),
            jenkins.Credentials(
                username=self.config.username,
                password_or_token=self.config.password_or_token,
            ),
            timeout=self.config.timeout,
            ssl_verify=self.config.ssl_verify,
        )
        return jenkins.CredentialsManager(client)

    def resource(self, type_name: str) -> CredentialResource:
        """Get the handler of a resource type.

        Args:
            type_name: The resource type name, i.e. "jenkins_credential".

        Returns:
            The resource handler bound to the configured domain and scope.

        Raises:
            KeyError: if the resource type is not served by the provider.
        """
        try:
            resource_type = RESOURCES[type_name]
        except KeyError as exc:
            logger.error("Unknown resource type %s", type_name)
            raise KeyError(f"Unknown resource type {type_name}.") from exc
        return resource_type(domain=self.config.domain, scope=self.config.scope)
