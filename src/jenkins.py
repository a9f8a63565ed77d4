# Copyright 2025 Canonical Ltd.
# See LICENSE file for licensing details.

"""Functions to operate Jenkins credentials."""

import dataclasses
import logging
import typing
import urllib.parse
import xml.etree.ElementTree as ET  # nosec B405 we only parse responses of the configured server

import jenkinsapi.custom_exceptions
import jenkinsapi.jenkins
import requests

from types_ import Credential

logger = logging.getLogger(__name__)

# The credentials store of the Jenkins instance itself (as opposed to folder stores)
SYSTEM_STORE_PATH = "/credentials/store/system"

CredentialT = typing.TypeVar("CredentialT", bound=Credential)


class JenkinsError(Exception):
    """Base exception for Jenkins errors."""


class CredentialNotFoundError(JenkinsError):
    """The requested credential does not exist in the credentials store."""


@dataclasses.dataclass(frozen=True)
class Credentials:
    """Information needed to log into Jenkins.

    Attributes:
        username: The Jenkins account username used to log into Jenkins.
        password_or_token: The Jenkins API token or account password used to log into Jenkins.
    """

    username: str
    password_or_token: str = dataclasses.field(repr=False)


def get_client(
    url: str, client_credentials: Credentials, timeout: int = 60, ssl_verify: bool = True
) -> jenkinsapi.jenkins.Jenkins:
    """Get the Jenkins client.

    Args:
        url: The Jenkins server URL.
        client_credentials: The credentials of a Jenkins user with access to the Jenkins API.
        timeout: The HTTP request timeout in seconds.
        ssl_verify: Whether to verify the server TLS certificate.

    Returns:
        The Jenkins client.
    """
    return jenkinsapi.jenkins.Jenkins(
        baseurl=url.rstrip("/"),
        username=client_credentials.username,
        password=client_credentials.password_or_token,
        ssl_verify=ssl_verify,
        timeout=timeout,
        lazy=True,
    )


def credential_to_xml(credential: Credential) -> str:
    """Encode a credential into the XML document accepted by the credentials plugin.

    Args:
        credential: The credential to encode.

    Returns:
        The credential XML document.
    """
    root = ET.Element(credential.jenkins_class)
    for field in dataclasses.fields(credential):
        ET.SubElement(root, field.name).text = getattr(credential, field.name)
    return ET.tostring(root, encoding="unicode")


def credential_from_xml(credential_type: type[CredentialT], document: str) -> CredentialT:
    """Decode a credential from the credentials plugin XML document.

    Secret values are redacted by Jenkins and decode as empty strings.

    Args:
        credential_type: The expected credential type.
        document: The credential config.xml contents.

    Returns:
        The decoded credential.

    Raises:
        JenkinsError: if the document is not a credential of the expected type.
    """
    try:
        root = ET.fromstring(document)  # nosec B314
    except ET.ParseError as exc:
        logger.error("Failed to parse credential document, %s", exc)
        raise JenkinsError("Invalid credential document.") from exc
    if root.tag != credential_type.jenkins_class:
        raise JenkinsError(
            f"Credential is a {root.tag}, expected {credential_type.jenkins_class}."
        )
    values = {
        field.name: (root.findtext(field.name) or "").strip()
        for field in dataclasses.fields(credential_type)
    }
    return credential_type(**values)


class CredentialsManager:
    """Client of the Jenkins system credentials store.

    Attrs:
        client: The Jenkins API client.
    """

    def __init__(self, client: jenkinsapi.jenkins.Jenkins):
        """Construct a credentials manager.

        Args:
            client: The Jenkins API client.
        """
        self.client = client

    def _domain_url(self, domain: str) -> str:
        """Get the URL of a credentials domain.

        Args:
            domain: The credentials domain.

        Returns:
            The URL of the domain in the system credentials store.
        """
        quoted_domain = urllib.parse.quote(domain, safe="")
        return f"{self.client.baseurl}{SYSTEM_STORE_PATH}/domain/{quoted_domain}"

    def _credential_url(self, domain: str, credential_id: str) -> str:
        """Get the URL of a credential.

        Args:
            domain: The credentials domain.
            credential_id: The credential identifier.

        Returns:
            The URL of the credential.
        """
        quoted_id = urllib.parse.quote(credential_id, safe="")
        return f"{self._domain_url(domain)}/credential/{quoted_id}"

    def _post_credential(self, url: str, credential: Credential, action: str) -> None:
        """Post a credential document, failures never carry the document along.

        Args:
            url: The endpoint receiving the credential document.
            credential: The credential to post.
            action: The operation name used in error messages, i.e. "create".

        Raises:
            JenkinsError: if the credential document was not accepted.
        """
        try:
            response = self.client.requester.post_url(
                url,
                data=credential_to_xml(credential),
                headers={"Content-Type": "application/xml"},
            )
        except requests.exceptions.RequestException as exc:
            # The request attached to the exception holds the credential document.
            logger.error(
                "Failed to %s credential %s, %s", action, credential.id, exc.__class__.__name__
            )
            raise JenkinsError(f"Failed to {action} credential {credential.id}.") from None
        if not response.ok:
            logger.error(
                "Failed to %s credential %s, status %s",
                action,
                credential.id,
                response.status_code,
            )
            raise JenkinsError(
                f"Failed to {action} credential {credential.id}, status {response.status_code}."
            )

    def add(self, domain: str, credential: Credential) -> None:
        """Add a credential to a domain.

        Args:
            domain: The credentials domain.
            credential: The credential to add.

        Raises:
            JenkinsError: if the credential could not be created.
        """
        self._post_credential(
            f"{self._domain_url(domain)}/createCredentials", credential, "create"
        )

    def get_single(
        self, domain: str, credential_id: str, credential_type: type[CredentialT]
    ) -> CredentialT:
        """Get a single credential of a domain.

        Args:
            domain: The credentials domain.
            credential_id: The credential identifier.
            credential_type: The expected credential type.

        Returns:
            The credential with its secret values redacted.

        Raises:
            CredentialNotFoundError: if the credential does not exist.
            JenkinsError: if the credential could not be fetched.
        """
        try:
            response = self.client.requester.get_url(
                f"{self._credential_url(domain, credential_id)}/config.xml"
            )
        except requests.exceptions.RequestException as exc:
            logger.error("Failed to fetch credential %s, %s", credential_id, exc)
            raise JenkinsError(f"Failed to fetch credential {credential_id}.") from exc
        if response.status_code == requests.codes.not_found:
            raise CredentialNotFoundError(f"Credential {credential_id} not found.")
        if not response.ok:
            logger.error(
                "Failed to fetch credential %s, status %s", credential_id, response.status_code
            )
            raise JenkinsError(
                f"Failed to fetch credential {credential_id}, status {response.status_code}."
            )
        return credential_from_xml(credential_type, response.text)

    def update(self, domain: str, credential_id: str, credential: Credential) -> None:
        """Replace a credential of a domain.

        Args:
            domain: The credentials domain.
            credential_id: The identifier of the credential to replace.
            credential: The replacement credential.

        Raises:
            JenkinsError: if the credential could not be updated.
        """
        self._post_credential(
            f"{self._credential_url(domain, credential_id)}/config.xml", credential, "update"
        )

    def delete(self, domain: str, credential_id: str) -> None:
        """Delete a credential of a domain.

        Args:
            domain: The credentials domain.
            credential_id: The identifier of the credential to delete.

        Raises:
            JenkinsError: if the credential could not be deleted.
        """
        try:
            self.client.requester.post_and_confirm_status(
                f"{self._credential_url(domain, credential_id)}/doDelete",
                data={"Submit": "OK"},
            )
        except (
            jenkinsapi.custom_exceptions.JenkinsAPIException,
            requests.exceptions.RequestException,
        ) as exc:
            logger.error("Failed to delete credential %s, %s", credential_id, exc)
            raise JenkinsError(f"Failed to delete credential {credential_id}.") from exc
