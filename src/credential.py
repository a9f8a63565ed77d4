# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Jenkins credential resource handlers."""

import abc
import logging
import typing
import uuid

import jenkins
from state import ResourceData, ResourceDataInvalidError, SecretSpec, UsernamePasswordSpec
from types_ import (
    DEFAULT_DOMAIN,
    DEFAULT_SCOPE,
    Credential,
    StringCredential,
    UsernamePasswordCredential,
)

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a new credential identifier.

    Returns:
        A random unique identifier.
    """
    return str(uuid.uuid4())


class CredentialResource(abc.ABC):
    """Lifecycle of a Jenkins credential managed by the orchestration host.

    Attrs:
        type_name: The resource type name registered with the provider.
        credential_type: The kind of credential managed.
        domain: The credentials domain.
        scope: The scope given to the managed credentials.
    """

    type_name: typing.ClassVar[str]
    credential_type: typing.ClassVar[type[Credential]]

    def __init__(self, domain: str = DEFAULT_DOMAIN, scope: str = DEFAULT_SCOPE):
        """Construct the resource handler.

        Args:
            domain: The credentials domain.
            scope: The scope given to the managed credentials.
        """
        self.domain = domain
        self.scope = scope

    @abc.abstractmethod
    def _build(self, data: ResourceData, credential_id: str) -> Credential:
        """Assemble the credential payload from the declared fields.

        Args:
            data: The declared resource data.
            credential_id: The identifier of the credential.
        """

    def _label(self, data: ResourceData) -> str:
        """Get the name the credential is referred to in logs.

        Args:
            data: The declared resource data.

        Returns:
            The credential identifier.
        """
        return data.id

    def exists(self, data: ResourceData, manager: jenkins.CredentialsManager) -> bool:
        """Check whether the credential still exists in the credentials store.

        Any store error is reported as a missing credential and the resource identifier is
        cleared so that the host drops the resource from its state.

        Args:
            data: The declared resource data.
            manager: The credentials store client.

        Returns:
            True if the credential exists, False otherwise.
        """
        label = self._label(data)
        if not data.id:
            return False
        try:
            manager.get_single(self.domain, data.id, self.credential_type)
        except jenkins.CredentialNotFoundError as exc:
            logger.debug("jenkins::exists - credential %s does not exist: %s", label, exc)
            data.set_id("")
            return False
        except jenkins.JenkinsError as exc:
            logger.warning("jenkins::exists - credential %s lookup failed: %s", label, exc)
            data.set_id("")
            return False
        logger.debug("jenkins::exists - credential %s exists", label)
        return True

    def create(self, data: ResourceData, manager: jenkins.CredentialsManager) -> str:
        """Create the credential with a newly generated identifier.

        Args:
            data: The declared resource data.
            manager: The credentials store client.

        Returns:
            The identifier of the created credential.
        """
        credential_id = generate_id()
        credential = self._build(data, credential_id)
        # The identifier is not assigned yet.
        label = self._label(data) or credential_id
        try:
            manager.add(self.domain, credential)
        except jenkins.JenkinsError as exc:
            logger.error("jenkins::create - error creating credential for %s: %s", label, exc)
            raise
        logger.debug("jenkins::create - credential %s created", label)
        data.set_id(credential_id)
        return credential_id

    def read(self, data: ResourceData, manager: jenkins.CredentialsManager) -> None:
        """Confirm the credential is still present in the credentials store.

        Only presence is checked, the declared fields are not refreshed from the store and the
        identifier is kept on failure.

        Args:
            data: The declared resource data.
            manager: The credentials store client.

        Raises:
            JenkinsError: if the credential could not be fetched.
        """
        credential_id = _require_id(data)
        label = self._label(data)
        logger.debug("jenkins::read - looking for credential %s", label)
        try:
            manager.get_single(self.domain, credential_id, self.credential_type)
        except jenkins.JenkinsError as exc:
            logger.debug("jenkins::read - credential %s does not exist: %s", label, exc)
            raise
        logger.debug("jenkins::read - credential %s exists", label)
        data.set_id(credential_id)

    def update(self, data: ResourceData, manager: jenkins.CredentialsManager) -> None:
        """Replace every mutable field of the credential with the declared values.

        Args:
            data: The declared resource data.
            manager: The credentials store client.

        Raises:
            JenkinsError: if the credential could not be updated.
        """
        credential_id = _require_id(data)
        credential = self._build(data, credential_id)
        try:
            manager.update(self.domain, credential_id, credential)
        except jenkins.JenkinsError as exc:
            logger.debug("jenkins::update - credential %s not updated: %s", self._label(data), exc)
            raise
        data.set_id(credential_id)

    def delete(self, data: ResourceData, manager: jenkins.CredentialsManager) -> None:
        """Delete the credential, the identifier is cleared even if deletion fails.

        Args:
            data: The declared resource data.
            manager: The credentials store client.

        Raises:
            JenkinsError: if the credential could not be deleted.
        """
        credential_id = _require_id(data)
        logger.debug("jenkins::delete - deleting credential %s", credential_id)
        try:
            manager.delete(self.domain, credential_id)
        finally:
            data.set_id("")


class UsernamePasswordCredentialResource(CredentialResource):
    """Username with password credential resource."""

    type_name = "jenkins_credential"
    credential_type = UsernamePasswordCredential

    def _build(self, data: ResourceData, credential_id: str) -> UsernamePasswordCredential:
        """Assemble the username with password credential.

        Args:
            data: The declared resource data.
            credential_id: The identifier of the credential.

        Returns:
            The credential payload.
        """
        spec = UsernamePasswordSpec.from_resource_data(data)
        return UsernamePasswordCredential(
            scope=self.scope,
            id=credential_id,
            description=spec.description,
            username=spec.username,
            password=spec.password,
        )

    def _label(self, data: ResourceData) -> str:
        """Get the name the credential is referred to in logs.

        Args:
            data: The declared resource data.

        Returns:
            The declared username.
        """
        return str(data.get("username", ""))


class SecretTextCredentialResource(CredentialResource):
    """Secret text credential resource."""

    type_name = "jenkins_credential_string"
    credential_type = StringCredential

    def _build(self, data: ResourceData, credential_id: str) -> StringCredential:
        """Assemble the secret text credential.

        Args:
            data: The declared resource data.
            credential_id: The identifier of the credential.

        Returns:
            The credential payload.
        """
        spec = SecretSpec.from_resource_data(data)
        return StringCredential(
            scope=self.scope,
            id=credential_id,
            description=spec.description,
            secret=spec.secret,
        )


def _require_id(data: ResourceData) -> str:
    """Get the identifier of a resource that must exist remotely.

    Args:
        data: The declared resource data.

    Returns:
        The resource identifier.

    Raises:
        ResourceDataInvalidError: if the resource has no identifier.
    """
    if not data.id:
        raise ResourceDataInvalidError("Resource has no identifier.")
    return data.id
